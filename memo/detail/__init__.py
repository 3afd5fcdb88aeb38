"""
FILE: memo/detail/__init__.py
PURPOSE: Task detail screen (presenter and edit form)
EXPORTS:
  - DetailPresenter, DetailViewModel (from detail.presenter)
  - EditForm (from detail.form)
"""

from .form import EditForm
from .presenter import DetailPresenter, DetailViewModel

__all__ = ["DetailPresenter", "DetailViewModel", "EditForm"]
