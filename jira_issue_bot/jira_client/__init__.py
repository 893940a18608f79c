"""Jira REST client: session handling, query execution and models."""

from .client import JiraClient
from .models import Issue, JiraSession
from .session import SessionManager

__all__ = ["Issue", "JiraClient", "JiraSession", "SessionManager"]
