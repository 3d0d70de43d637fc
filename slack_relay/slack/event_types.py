EVENT_URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"
EVENT_APP_MENTION = "app_mention"

HEADER_SIGNATURE = "X-Slack-Signature"
HEADER_TIMESTAMP = "X-Slack-Request-Timestamp"
HEADER_RETRY_NUM = "X-Slack-Retry-Num"

# Accepted when the Slack-specific header is absent.
FALLBACK_HEADER_SIGNATURE = "X-Signature"
FALLBACK_HEADER_TIMESTAMP = "X-Request-Timestamp"
