"""
AI Task Manager

Natural-language task analysis and task management service.
"""
