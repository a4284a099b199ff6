"""
HTTP header names sent by the device firmware.
"""

HEADER_MAC = "ID"
HEADER_ACCESS_TOKEN = "Access-Token"
HEADER_FW_VERSION = "FW-Version"
HEADER_BATTERY_VOLTAGE = "Battery-Voltage"
HEADER_REFRESH_RATE = "Refresh-Rate"
HEADER_RSSI = "RSSI"
HEADER_REQUEST_ID = "X-Request-ID"
