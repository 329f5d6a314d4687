from app.models.category import Category, Subcategory
from app.errors.exceptions import NotFoundError, ValidationError
from app.lib.query import (
    delete_by_id,
    select_by_id,
    select_with_filter,
    update_by_id,
)

CATEGORY_FIELDS = ("name", "image", "description")
SUBCATEGORY_FIELDS = ("name", "image", "description", "category_id")


def _pick(data, fields):
    return {key: data[key] for key in fields if key in data}


class CategoryService:

    @staticmethod
    def get_categories():
        return select_with_filter(Category, [], [Category.id.asc()])

    @staticmethod
    def find(id):
        category = select_by_id(Category, id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def create_category(**kwargs):
        if not kwargs.get("name"):
            raise ValidationError("Category name is required")
        category = Category(**_pick(kwargs, CATEGORY_FIELDS))
        category.save()
        return category

    @staticmethod
    def update_category(id, **kwargs):
        category = update_by_id(Category, id, _pick(kwargs, CATEGORY_FIELDS))
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def delete_category(id):
        if not delete_by_id(Category, id):
            raise NotFoundError("Category not found")
        return True

    @staticmethod
    def get_subcategories(category_id=None):
        filters = []
        if category_id is not None:
            filters.append(Subcategory.category_id == category_id)
        return select_with_filter(Subcategory, filters, [Subcategory.id.asc()])

    @staticmethod
    def find_subcategory(id):
        subcategory = select_by_id(Subcategory, id)
        if not subcategory:
            raise NotFoundError("Subcategory not found")
        return subcategory

    @staticmethod
    def create_subcategory(**kwargs):
        if not kwargs.get("name") or not kwargs.get("category_id"):
            raise ValidationError("Subcategory name and category are required")
        CategoryService.find(kwargs["category_id"])
        subcategory = Subcategory(**_pick(kwargs, SUBCATEGORY_FIELDS))
        subcategory.save()
        return subcategory

    @staticmethod
    def update_subcategory(id, **kwargs):
        data = _pick(kwargs, SUBCATEGORY_FIELDS)
        if data.get("category_id"):
            CategoryService.find(data["category_id"])
        subcategory = update_by_id(Subcategory, id, data)
        if not subcategory:
            raise NotFoundError("Subcategory not found")
        return subcategory

    @staticmethod
    def delete_subcategory(id):
        if not delete_by_id(Subcategory, id):
            raise NotFoundError("Subcategory not found")
        return True
