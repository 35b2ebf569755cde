"""Page-number pagination shared by every list endpoint.

Clients send ``?page=N&limit=M``.  Responses carry the page metadata
alongside the rows::

    {"page": 1, "limit": 10, "total": 42, "total_pages": 5, "data": [...]}
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data: List[Any]) -> Response:
        return Response(self._envelope(data))

    def _envelope(self, data: List[Any]) -> Dict[str, Any]:
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return {
            "page": self.page.number,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if limit else 0,
            "data": data,
        }

    def get_paginated_response_schema(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "type": "object",
            "required": ["page", "limit", "total", "total_pages", "data"],
            "properties": {
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": 10},
                "total": {"type": "integer", "example": 42},
                "total_pages": {"type": "integer", "example": 5},
                "data": schema,
            },
        }
