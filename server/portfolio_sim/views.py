import json

from django.conf import settings
from loguru import logger
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.response import Response
from rest_framework.views import APIView

from folio_core.domain.errors import InvalidInputError, SimulationTimeoutError
from folio_core.domain.models import SimulatorConfig
from folio_core.io import config as config_io
from folio_core.io import request as request_io
from folio_core.services import simulator

from .serializers import SimulationRequestSerializer


def _simulator_config() -> SimulatorConfig:
    return config_io.simulator_config_from_mapping(getattr(settings, "FOLIO_SIM", {}))


class SimulationView(APIView):
    parser_classes = [JSONParser]

    def post(self, request):
        if not isinstance(request.data, dict):
            return Response(
                request_io.error_to_json("Request body must be a JSON object"),
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = SimulationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                request_io.error_to_json("Invalid simulation request", json.dumps(serializer.errors)),
                status=status.HTTP_400_BAD_REQUEST,
            )

        config = _simulator_config()
        try:
            sim_request = request_io.parse_request(serializer.validated_data, config)
            result = simulator.run_simulation(sim_request, config)
        except InvalidInputError as exc:
            logger.info(f"Rejected simulation request: {exc.message}")
            return Response(request_io.error_to_json(exc.message, exc.details), status=status.HTTP_400_BAD_REQUEST)
        except SimulationTimeoutError:
            logger.warning("Simulation timed out")
            return Response(
                request_io.error_to_json("Simulation timed out"),
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except Exception:  # noqa: BLE001
            logger.exception("Simulation failed")
            return Response(
                request_io.error_to_json("Simulation error"),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(request_io.result_to_json(result))
