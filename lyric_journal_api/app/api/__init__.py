"""
HTTP layer.

``router`` aggregates the domain routers mounted under ``/api``; the
``client`` endpoint module serves the browser shell for every other
path and is included by ``main`` after the API routes.
"""
