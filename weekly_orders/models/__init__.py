"""Application models package."""

from weekly_orders.models.app_setting import AppSetting
from weekly_orders.models.cart import CartRecord
from weekly_orders.models.catalog import Category, Dish
from weekly_orders.models.menu import MenuOffering
from weekly_orders.models.order import Order, OrderItem

__all__ = ["AppSetting", "CartRecord", "Category", "Dish", "MenuOffering", "Order", "OrderItem"]
