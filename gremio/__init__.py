"""
Gremio backend.

Account lifecycle (verification codes, login, password reset, account
deletion), job applications and public profiles, served over FastAPI on
top of Supabase.
"""
