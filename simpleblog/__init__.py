"""SimpleBlog API Package — categories, posts and comments over HTTP/JSON.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
