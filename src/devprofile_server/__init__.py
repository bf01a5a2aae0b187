"""devprofile_server — FastAPI REST API for the developer-profile questionnaire.

Exposes session save/read, completed-session history, ad-hoc scoring and
the questionnaire definition over HTTP.
"""
