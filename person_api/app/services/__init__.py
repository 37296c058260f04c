"""
Service layer.

Services own all database interaction for their domain so that the API
handlers never see SQL or connections.
"""
