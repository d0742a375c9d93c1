"""
Core building blocks for the tourism content API: database wiring, the
application context, security helpers, exceptions and error handlers.
"""
