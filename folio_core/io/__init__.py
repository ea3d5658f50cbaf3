from folio_core.io.config import load_simulator_config, simulator_config_from_mapping  # noqa: F401
from folio_core.io.deposits import load_deposits  # noqa: F401
from folio_core.io.request import load_request, parse_request, result_from_json, result_to_json  # noqa: F401
from folio_core.io.results import result_to_frame, write_result_csv  # noqa: F401

__all__ = [
    "load_deposits",
    "load_request",
    "load_simulator_config",
    "parse_request",
    "result_from_json",
    "result_to_frame",
    "result_to_json",
    "simulator_config_from_mapping",
    "write_result_csv",
]
