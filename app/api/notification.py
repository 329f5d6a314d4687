# coding: utf8
from flask_jwt_extended import jwt_required
from flask_restx import Namespace, Resource
from app.lib.response import Response
from app.services.auth import AuthService
from app.services.notification import NotificationServices

ns = Namespace(name="notification", description="Notification API")


@ns.route("/")
class APINotifications(Resource):

    @jwt_required()
    def get(self):
        user_id = AuthService.get_user_id()
        notifications = NotificationServices.list_for(user_id)
        return Response(
            data={
                "notifications": [item.to_dict() for item in notifications],
                "unread_count": NotificationServices.unread_count(user_id),
            },
            message="Success",
        ).to_dict()


@ns.route("/unread-count")
class APIUnreadCount(Resource):

    @jwt_required()
    def get(self):
        count = NotificationServices.unread_count(AuthService.get_user_id())
        return Response(data={"unread_count": count}).to_dict()


@ns.route("/read-all")
class APIReadAll(Resource):

    @jwt_required()
    def put(self):
        updated = NotificationServices.mark_all_read(AuthService.get_user_id())
        return Response(
            data={"updated": updated}, message="All notifications marked as read"
        ).to_dict()


@ns.route("/<int:id>/read")
class APIMarkRead(Resource):

    @jwt_required()
    def put(self, id):
        NotificationServices.mark_read(id, AuthService.get_user_id())
        return Response(message="Notification marked as read").to_dict()


@ns.route("/<int:id>")
class APINotification(Resource):

    @jwt_required()
    def delete(self, id):
        NotificationServices.delete(id, AuthService.get_user_id())
        return Response(message="Notification deleted").to_dict()
