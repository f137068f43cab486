# Services package init
"""
Student Records API — Services Layer
======================================

Service Inventory:
    - StudentStore (abstract): Storage contract for Student records
    - MongoStudentStore: Concrete implementation on a MongoDB collection
    - StudentService: The list/get/create/update/delete handlers
"""
