"""
DevConnector API.

Authentication and developer-profile management for the DevConnector
social network.
"""
