"""Authentication.

Users sign up with email/password and log in to receive a session token
(a signed JWT). The token travels either in the ``token`` cookie (browsers)
or an ``Authorization: Bearer`` header (scripts), and both are checked by
the same verification function. The resolved user id becomes the
``CurrentIdentity`` that scopes every query.
"""
