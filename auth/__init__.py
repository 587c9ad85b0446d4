"""
auth — account credentials and session tokens.

Provides:
  • Credential stores (JSON file, in-memory)
  • Password hashing (bcrypt, auto-salted)
  • Signed session token issue & verification
  • ``AuthService`` for signup / login
  • Signup / login / protected API routes
"""
