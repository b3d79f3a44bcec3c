"""BODS (Bus Open Data Service) adapters."""

from bus_departures.adapters.bods_api.bods_timetable_repository import BodsTimetableRepository
from bus_departures.adapters.bods_api.bods_vehicle_repository import BodsVehicleRepository
from bus_departures.adapters.bods_api.http_client import BodsHttpClient
from bus_departures.adapters.bods_api.siri_vm_parser import SiriVmParser
from bus_departures.adapters.bods_api.transxchange_parser import TransXChangeParser

__all__ = [
    "BodsHttpClient",
    "BodsTimetableRepository",
    "BodsVehicleRepository",
    "SiriVmParser",
    "TransXChangeParser",
]
