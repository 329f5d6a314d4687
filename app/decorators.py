# coding: utf8
from functools import wraps

from flask import request
from flask_jwt_extended import verify_jwt_in_request
from jsonschema import FormatChecker, validate
from jsonschema.exceptions import ValidationError as SchemaError
from app.errors.exceptions import AccessDeniedError, MissingFields, ValidationError
from app.services.auth import AuthService


def parameters(**schema):
    """Validate merged query / json / form arguments against `schema`.

    The validated dict is passed to the view as an extra positional argument
    after `self`, route variables stay keyword arguments.
    """

    def decorated(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            req_args = request.args.to_dict()
            if (
                request.method in ("POST", "PUT", "PATCH", "DELETE")
                and request.mimetype == "application/json"
            ):
                req_args.update(request.get_json(silent=True) or {})

            if (
                request.method in ("POST", "PUT", "PATCH", "DELETE")
                and request.mimetype == "multipart/form-data"
            ):
                req_args.update(request.form.to_dict())

            req_args = {
                k: v for k, v in req_args.items() if k in schema["properties"].keys()
            }

            if "required" in schema:
                missing = [
                    field
                    for field in schema["required"]
                    if req_args.get(field) is None or req_args.get(field) == ""
                ]
                if missing:
                    raise MissingFields(
                        "{} is required".format(", ".join(missing)),
                        data={"missing": missing},
                    )

            try:
                validate(
                    instance=req_args, schema=schema, format_checker=FormatChecker()
                )
            except SchemaError as exp:
                exp_info = list(exp.schema_path)
                error_type = (
                    "type",
                    "format",
                    "pattern",
                    "maxLength",
                    "minLength",
                    "minimum",
                    "enum",
                )

                if set(exp_info).intersection(set(error_type)) and len(exp_info) > 1:
                    field = exp_info[1]
                    valid_values = schema["properties"].get(field, {}).get("enum", [])

                    message = f"Field '{field}' is not valid."
                    if valid_values:
                        message += " Valid values: {}.".format(
                            ", ".join(str(value) for value in valid_values)
                        )
                else:
                    message = "Request parameters are invalid."

                raise ValidationError(message)

            new_args = args + (req_args,)
            return func(*new_args, **kwargs)

        return wrapper

    return decorated


def staff_required():
    """Allow admins and owners only. Verifies the JWT itself."""

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            current_user = AuthService.require_current_user()
            if not current_user.is_staff:
                raise AccessDeniedError("Admin or owner access required")
            return fn(*args, **kwargs)

        return decorator

    return wrapper
