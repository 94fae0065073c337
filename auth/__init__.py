"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, configurable work factor)
  • ``AuthService`` for register / login
  • Register / Login API routes
"""
