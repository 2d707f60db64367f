"""
DevConnector services.
"""
