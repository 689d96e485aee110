"""Platform system endpoints and persistence.

This app hosts the JSON endpoints front-end widgets call (relation search),
the encryption used to protect their parameters, and the settings store.
"""
