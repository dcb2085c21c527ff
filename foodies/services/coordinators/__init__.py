"""Workflow coordinators."""
