# src/adms_gateway/__init__.py
"""ADMS push-protocol gateway for biometric attendance terminals."""
