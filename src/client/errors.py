"""User-facing messages for API failures.

The API reports failures as `{"detail": "<message>"}`; the client maps the
known messages to text suitable for display.
"""

UNAUTHORIZED = "unauthorized"
"""Returned when the session is missing or no longer valid."""

GENERAL_DEFAULT = "Something went wrong, please try again later"

SIGN_UP_DEFAULT = "Sign up failed, please try again later"

PROVIDER_SIGN_IN_ERRORS: dict[str, str] = {
    "Endpoint didn't respond with a 200 status code": "Wrong username or password",
    "Endpoint did not return a token": "The pod provider did not return a session",
    "Unsupported pod provider": "This pod provider is not supported",
}

PROVIDER_SIGN_UP_ERRORS: dict[str, str] = {
    "username.already.exists": "This username is already taken",
    "email.already.exists": "An account with this email already exists",
    "username.invalid": "This username is not valid",
    "Error with the provider": "The pod provider could not create the account",
    "Provider did not return a token": "The pod provider did not return a session",
    "Error while checking user": "Your account could not be set up, please try again",
}
