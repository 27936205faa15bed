"""
API Middleware - exception handlers converting engine errors into JSON
"""
