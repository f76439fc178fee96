# Routes package init
"""
Jokebox — API Routes Package
=============================

Route Inventory:
    - root.py:    GET  /, GET /test      (static greetings)
    - health.py:  GET  /health           (MongoDB reachability)
    - jokes.py:   GET  /jokes            (list all jokes)
                  POST /jokes            (create a joke)
    - upload.py:  POST /upload           (store a single file)

Routes are thin: extract request data, call a service, return a schema.
"""
