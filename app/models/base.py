# coding: utf8
from datetime import datetime
from decimal import Decimal
import json

import pytz
from sqlalchemy import inspect

from app.extensions import db


class BaseModel:
    __abstract__ = True

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    print_filter = ()
    to_json_filter = ()
    to_json_parse = ()

    def __repr__(self):
        """Define a base way to print models
        Columns inside `print_filter` are excluded"""
        return "%s(%s)" % (
            self.__class__.__name__,
            {
                column: value
                for column, value in self._to_dict().items()
                if column not in self.print_filter
            },
        )

    def _to_json(self):
        """Define a base way to jsonify models
        Columns inside `to_json_filter` are excluded"""
        tz = pytz.timezone("UTC")

        response = {}
        for column, value in self._to_dict().items():
            if column in self.to_json_filter:
                continue
            if column in self.to_json_parse:
                response[column] = (
                    json.loads(value) if value and isinstance(value, str) else value
                )
            elif isinstance(value, datetime):
                if value.tzinfo is None:
                    value = pytz.utc.localize(value)
                response[column] = value.astimezone(tz).strftime("%Y-%m-%dT%H:%M:%SZ")
            elif isinstance(value, Decimal):
                response[column] = float(value)
            else:
                response[column] = value

        return response

    def _to_dict(self):
        """Column values only, relationships are left to `to_dict` overrides"""
        return {
            column.key: getattr(self, column.key)
            for column in inspect(self.__class__).column_attrs
        }

    def save(self):
        db.session.add(self)
        db.session.commit()
        return self

    def update(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)
        db.session.commit()
        return self

    def delete(self):
        db.session.delete(self)
        db.session.commit()
