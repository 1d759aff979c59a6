"""
AI Task Manager - Tasks Module

Task model, persistence, filtering/sorting and the task API.
"""
