# coding: utf8
from flask_restx import Namespace, Resource
from app.decorators import parameters, staff_required
from app.lib.response import Response
from app.services.category import CategoryService

ns = Namespace(name="category", description="Category API")

CATEGORY_PROPERTIES = {
    "name": {"type": "string", "minLength": 1},
    "image": {"type": ["string", "null"]},
    "description": {"type": ["string", "null"]},
}

SUBCATEGORY_PROPERTIES = dict(
    CATEGORY_PROPERTIES, category_id={"type": "integer", "minimum": 1}
)


@ns.route("/")
class APICategories(Resource):

    def get(self):
        categories = CategoryService.get_categories()
        return Response(data=[category._to_json() for category in categories]).to_dict()

    @staff_required()
    @parameters(type="object", properties=CATEGORY_PROPERTIES, required=["name"])
    def post(self, args):
        category = CategoryService.create_category(**args)
        return Response(
            code=201,
            status=201,
            data=category._to_json(),
            message="Category created successfully",
        ).to_dict()


@ns.route("/<int:id>")
class APICategory(Resource):

    def get(self, id):
        return Response(data=CategoryService.find(id)._to_json()).to_dict()

    @staff_required()
    @parameters(type="object", properties=CATEGORY_PROPERTIES)
    def put(self, args, id):
        category = CategoryService.update_category(id, **args)
        return Response(
            data=category._to_json(), message="Category updated successfully"
        ).to_dict()

    @staff_required()
    def delete(self, id):
        CategoryService.delete_category(id)
        return Response(message="Category deleted successfully").to_dict()


@ns.route("/<int:id>/subcategories")
class APICategorySubcategories(Resource):

    def get(self, id):
        CategoryService.find(id)
        subcategories = CategoryService.get_subcategories(category_id=id)
        return Response(data=[item._to_json() for item in subcategories]).to_dict()


@ns.route("/subcategories")
class APISubcategories(Resource):

    def get(self):
        subcategories = CategoryService.get_subcategories()
        return Response(data=[item._to_json() for item in subcategories]).to_dict()

    @staff_required()
    @parameters(
        type="object",
        properties=SUBCATEGORY_PROPERTIES,
        required=["name", "category_id"],
    )
    def post(self, args):
        subcategory = CategoryService.create_subcategory(**args)
        return Response(
            code=201,
            status=201,
            data=subcategory._to_json(),
            message="Subcategory created successfully",
        ).to_dict()


@ns.route("/subcategories/<int:id>")
class APISubcategory(Resource):

    @staff_required()
    @parameters(type="object", properties=SUBCATEGORY_PROPERTIES)
    def put(self, args, id):
        subcategory = CategoryService.update_subcategory(id, **args)
        return Response(
            data=subcategory._to_json(), message="Subcategory updated successfully"
        ).to_dict()

    @staff_required()
    def delete(self, id):
        CategoryService.delete_subcategory(id)
        return Response(message="Subcategory deleted successfully").to_dict()
