"""Notification inbox service for the production-scheduling application."""
