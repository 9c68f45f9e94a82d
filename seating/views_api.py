"""
views_api.py

Thin HTTP shell over the seating engine. Request bodies use the
``{"data": {...}}`` envelope; engine errors are rendered by
``seating.exceptions.seating_exception_handler``.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .engine import SeatingEngine
from .exceptions import InvalidRequest
from .models import Table
from .serializers import TableSerializer
from .validators import validate_capacity_field, validate_name


def _payload(request):
    data = request.data.get("data") if hasattr(request.data, "get") else None
    if not isinstance(data, dict):
        raise InvalidRequest("data must be in a valid format.")
    return data


class SeatingAPIView(APIView):
    engine_class = SeatingEngine

    def get_engine(self):
        return self.engine_class()


class TableListCreateView(SeatingAPIView):
    def get(self, request):
        tables = Table.objects.all()
        return Response({"data": TableSerializer(tables, many=True).data})

    def post(self, request):
        data = _payload(request)
        table_name = validate_name(data.get("table_name"))
        capacity = validate_capacity_field(data.get("capacity"))
        table = self.get_engine().tables.create({"table_name": table_name, "capacity": capacity})
        return Response({"data": TableSerializer(table).data}, status=status.HTTP_201_CREATED)


class TableSeatView(SeatingAPIView):
    def put(self, request, table_id):
        data = _payload(request)
        result = self.get_engine().seat(table_id, data.get("reservation_id"))
        return Response({"data": result})

    def delete(self, request, table_id):
        result = self.get_engine().finish(table_id)
        return Response({"data": result}, status=status.HTTP_200_OK)


class TableCapacityView(SeatingAPIView):
    """Pre-flight check: does a party of ``?people=N`` fit at this table?"""

    def get(self, request, table_id):
        people = request.query_params.get("people")
        if people is None:
            raise InvalidRequest("query must include people.")
        fits = self.get_engine().validate_capacity(table_id, people)
        return Response({"data": {"fits": fits}})
