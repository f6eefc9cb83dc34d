"""Team Scheduler package.

Organized by feature modules (users, events, tasks, projects, attendance, ...)
with a thin Flask JSON controller layer over service/repository layers.
"""
