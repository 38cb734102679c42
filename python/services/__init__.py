"""
Services package.

Main modules:
- api_client.py - Async API client (URL normalization, envelope unwrapping, loading counter, cancellation)
- list_page.py - Exercises/Methods list page controllers
- pagination.py - Paginator and search filtering
- auth.py - Sessions, password hashing and the page session gate
"""

from services.api_client import ApiClient, ApiError, CancelToken, LoadingState, get_loading_state
from services.pagination import Paginator, paginate, filter_items
from services.list_page import ExercisesPage, MethodsPage, Notifier

__all__ = [
    'ApiClient',
    'ApiError',
    'CancelToken',
    'LoadingState',
    'get_loading_state',
    'Paginator',
    'paginate',
    'filter_items',
    'ExercisesPage',
    'MethodsPage',
    'Notifier',
]
