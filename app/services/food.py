from decimal import Decimal, InvalidOperation

from app.models.food import Food
from app.services.category import CategoryService
from app.errors.exceptions import NotFoundError, ValidationError
from app.lib.query import (
    delete_by_id,
    select_by_id,
    select_with_filter,
    update_by_id,
)

FOOD_FIELDS = (
    "name",
    "image",
    "offer_details",
    "customer_rate",
    "food_type",
    "amount",
    "discount",
    "description",
    "subcategory_id",
)


class FoodService:

    @staticmethod
    def _clean(data):
        cleaned = {key: data[key] for key in FOOD_FIELDS if key in data}

        # 0 means "no subcategory" for the admin forms
        if "subcategory_id" in cleaned and not cleaned["subcategory_id"]:
            cleaned["subcategory_id"] = None
        if cleaned.get("subcategory_id"):
            CategoryService.find_subcategory(cleaned["subcategory_id"])

        for key in ("amount", "discount", "customer_rate"):
            if cleaned.get(key) is None:
                continue
            try:
                cleaned[key] = Decimal(str(cleaned[key]))
            except InvalidOperation:
                raise ValidationError(f"Field '{key}' is not a number")
            if cleaned[key] < 0:
                raise ValidationError(f"Field '{key}' must not be negative")
        return cleaned

    @staticmethod
    def get_foods(subcategory_id=None):
        filters = []
        if subcategory_id:
            filters.append(Food.subcategory_id == subcategory_id)
        return select_with_filter(Food, filters, [Food.id.asc()])

    @staticmethod
    def get_food(id):
        food = select_by_id(Food, id)
        if not food:
            raise NotFoundError("Food not found")
        return food

    @staticmethod
    def get_price(food_id):
        food = FoodService.get_food(food_id)
        return {
            "name": food.name,
            "image": food.image,
            "amount": food.amount,
            "discount": food.discount or Decimal("0"),
        }

    @staticmethod
    def create_food(**kwargs):
        data = FoodService._clean(kwargs)
        if not data.get("name") or data.get("amount") is None:
            raise ValidationError("Food name and amount are required")
        food = Food(**data)
        food.save()
        return food

    @staticmethod
    def update_food(id, **kwargs):
        food = update_by_id(Food, id, FoodService._clean(kwargs))
        if not food:
            raise NotFoundError("Food not found")
        return food

    @staticmethod
    def delete_food(id):
        # order items, history and notifications keep their rows (food_id -> NULL)
        if not delete_by_id(Food, id):
            raise NotFoundError("Food not found")
        return True
