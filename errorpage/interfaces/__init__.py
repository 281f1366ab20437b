"""
Interface layer package.

FastAPI routers, response schemas, error page templates and the
wiring that assembles the dispatch error stack.
"""
