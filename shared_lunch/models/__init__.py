"""Application models package."""

from shared_lunch.models.app_setting import AppSetting
from shared_lunch.models.menu import Category, Dish
from shared_lunch.models.order import Order, OrderItem
from shared_lunch.models.user import AllowedUser

__all__ = ["AllowedUser", "AppSetting", "Category", "Dish", "Order", "OrderItem"]
