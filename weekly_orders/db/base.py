"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from weekly_orders.models import app_setting as _app_setting  # noqa: E402,F401
from weekly_orders.models import cart as _cart  # noqa: E402,F401
from weekly_orders.models import catalog as _catalog  # noqa: E402,F401
from weekly_orders.models import menu as _menu  # noqa: E402,F401
from weekly_orders.models import order as _order  # noqa: E402,F401
