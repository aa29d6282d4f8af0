# normadb/__init__.py
"""PostgreSQL DDL normalization analyzer."""
