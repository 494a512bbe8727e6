# views/utils.py
"""
Shared tooling for drf-spectacular docs on APIView classes.
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from rest_framework import serializers

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={
        "message": serializers.CharField(),
        "stack": serializers.CharField(allow_null=True),
    }
)

PaginationMetaSerializer = inline_serializer(
    name="PaginationMeta",
    fields={
        "page": serializers.IntegerField(),
        "limit": serializers.IntegerField(),
        "total": serializers.IntegerField(),
        "pages": serializers.IntegerField(),
    }
)

# ---- Param helpers

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)

PAGE_PARAMS = [
    q_int("page", "Page number (default 1)"),
    q_int("limit", "Page size (default 20, max 200)"),
]

# ---- Convenience for common responses

def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs


def paged(name: str, serializer_cls):
    """Schema for ``{<name>: [...], pagination: {...}}`` list responses"""
    return inline_serializer(
        name=f"Paged{serializer_cls.__name__.replace('Serializer', '')}",
        fields={
            name: serializer_cls(many=True),
            "pagination": PaginationMetaSerializer,
        }
    )
