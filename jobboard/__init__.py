"""
Job Board Backend.

Core components:
- db: tables and session management
- services: user directory, job board, resume store
- api: FastAPI routes and response envelope
- storage: resume bucket on Supabase Storage
"""
