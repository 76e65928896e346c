"""Directory sync attribute extraction package.

To use the Flask app:
    from dsync.flask_app import create_app

To extract attributes from a directory sync event:
    from dsync.core.scim_attributes import get_attributes_from_scim_payload
"""
# Note: We don't import flask_app by default so the extractor and the CLI
# can be used without Flask being imported
