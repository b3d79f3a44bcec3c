"""Constants for the Bus Open Data Service (BODS) adapter.

API Documentation: https://data.bus-data.dft.gov.uk/api/

Authentication is by ``api_key`` query parameter on every request.
"""

BODS_BASE_URL = "https://data.bus-data.dft.gov.uk/api/v1"
BODS_DATASET_PATH = "/dataset/{dataset_id}/"  # GET dataset metadata (JSON)
BODS_DATAFEED_PATH = "/datafeed/"  # GET SIRI-VM live feed (XML), ?boundingBox=...

API_KEY_PARAM = "api_key"

DEFAULT_HEADERS = {
    "Accept": "application/json, application/xml;q=0.9, */*;q=0.8",
}
