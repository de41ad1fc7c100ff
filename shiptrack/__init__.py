"""Shipment tracking assistant: board order classification and reply re-detection."""
