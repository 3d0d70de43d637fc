import logging

from slack_sdk.signature import Clock
from slack_sdk.signature import SignatureVerifier as SlackSdkSignatureVerifier

from slack_relay.errors import AuthenticationError

logger = logging.getLogger("slack_relay")


class SignatureVerifier:
    """Checks the Slack request signature over the raw request body.

    Fails closed: an unset secret rejects every request. slack_sdk rejects
    timestamps more than five minutes from ``clock`` to block replays.
    """

    def __init__(self, signing_secret: str, clock: Clock | None = None) -> None:
        self.signing_secret = signing_secret
        self._sdk_verifier = (
            SlackSdkSignatureVerifier(signing_secret=signing_secret, clock=clock or Clock())
            if signing_secret
            else None
        )

    def verify(self, body: bytes, timestamp: str | None, signature: str | None) -> bool:
        try:
            self.authenticate(body, timestamp, signature)
        except AuthenticationError as exc:
            logger.warning("Slack signature rejected: %s", exc)
            return False
        return True

    def authenticate(self, body: bytes, timestamp: str | None, signature: str | None) -> None:
        if self._sdk_verifier is None:
            logger.error("Slack signing secret is not configured.")
            raise AuthenticationError("signing secret not configured")

        if not signature or not timestamp:
            raise AuthenticationError("missing signature headers")

        # slack_sdk calls int() on the timestamp itself and would raise.
        try:
            int(timestamp)
        except ValueError:
            raise AuthenticationError("malformed timestamp") from None

        try:
            valid = self._sdk_verifier.is_valid(body=body, timestamp=timestamp, signature=signature)
        except UnicodeDecodeError:
            raise AuthenticationError("body is not UTF-8") from None
        if not valid:
            raise AuthenticationError("signature mismatch or stale timestamp")

    def generate_signature(self, timestamp: str, body: bytes) -> str:
        if self._sdk_verifier is None:
            raise AuthenticationError("signing secret not configured")
        return self._sdk_verifier.generate_signature(timestamp=timestamp, body=body)
