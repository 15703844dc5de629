"""
auth — User authentication module.

Provides:
  • Signed, time-limited bearer token minting & verification
  • Password hashing (bcrypt)
  • Register / Login service and API routes
  • ``get_current_user_id`` FastAPI dependency
"""
