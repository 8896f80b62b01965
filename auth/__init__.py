"""
auth — User authentication module.

Provides:
  • Signed bearer tokens embedding a user snapshot (``TokenSigner``)
  • Password hashing (bcrypt, ``PasswordHasher``)
  • Signup / Login / Logout API routes
  • ``get_current_user`` FastAPI dependency
"""
