"""
Pagination utilities for the planner API.

This module provides custom pagination classes for DRF APIs.
"""

from collections import OrderedDict

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    Standard pagination for list endpoints.

    Features:
    - Page size parameter
    - Max page size limit
    - Consistent response format
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

    def get_paginated_response(self, data):
        """
        Custom pagination response format.

        Args:
            data: The paginated data

        Returns:
            Response: Paginated response
        """
        return Response(
            OrderedDict(
                [
                    ("count", self.page.paginator.count),
                    ("next", self.get_next_link()),
                    ("previous", self.get_previous_link()),
                    ("page_size", self.get_page_size(self.request)),
                    ("current_page", self.page.number),
                    ("total_pages", self.page.paginator.num_pages),
                    ("results", data),
                ]
            )
        )


def suggestion_page_response(page, results):
    """
    Render an engine page with its offset/limit envelope.

    Args:
        page: Engine page with 'count', 'has_more', 'limit' and 'offset'
        results: Serialized suggestions for the page

    Returns:
        Response: Paginated response
    """
    return Response(
        OrderedDict(
            [
                ("count", page["count"]),
                ("has_more", page["has_more"]),
                ("limit", page["limit"]),
                ("offset", page["offset"]),
                ("results", results),
            ]
        )
    )
