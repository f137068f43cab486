# Routes package init
"""
Student Records API — Routes Package
======================================

Route Inventory:
    - students.py:  GET/POST   {prefix}
                    GET/PUT/DELETE {prefix}/{student_id}
    - health.py:    GET /health

Routes are THIN: they extract path/body data, call StudentService, and let
the global exception handlers in main.py turn errors into responses.
"""
