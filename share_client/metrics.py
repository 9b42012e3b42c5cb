from prometheus_client import Counter, Histogram

# Histogram for Share API call latency (seconds)
share_api_call_latency_seconds = Histogram(
    'share_api_call_latency_seconds',
    'Latency of Share API calls in seconds',
    ['endpoint']
)

# Counter for total API calls, labeled by endpoint and status
# status: success, error
# endpoint: login, latest_glucose
share_api_call_total = Counter(
    'share_api_call_total',
    'Total Share API calls',
    ['endpoint', 'status']
)

# Counter for session re-authentications after a shape-mismatched fetch
share_reauth_total = Counter(
    'share_reauth_total',
    'Total Share re-authentications after an undecodable fetch response'
)

share_readings_decoded_total = Counter(
    'share_readings_decoded_total',
    'Total number of glucose readings decoded from Share responses'
)

__all__ = [
    'share_api_call_latency_seconds',
    'share_api_call_total',
    'share_reauth_total',
    'share_readings_decoded_total',
]
