"""
Users Auth API

Registration, login and bearer-token verification for the users service.
"""
