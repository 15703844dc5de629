"""
tasks — Per-user to-do items.

Provides:
  • Task CRUD API routes
  • ``load_owned_task`` ownership guard applied before every single-task
    read, update or delete
"""
