"""
Prometheus metrics definitions for the upload pipeline.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# Upload outcome metrics
uploads_total = Counter(
    'directupload_uploads_total',
    'Total upload requests by terminal outcome',
    ['outcome']
)

upload_duration_seconds = Histogram(
    'directupload_upload_duration_seconds',
    'Upload duration from submission to terminal state, in seconds',
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

upload_bytes_total = Counter(
    'directupload_upload_bytes_total',
    'Total bytes transferred to storage'
)

# Remote call metrics
presign_requests_total = Counter(
    'directupload_presign_requests_total',
    'Total presign (upload authorization) requests',
    ['status']
)

transfers_total = Counter(
    'directupload_transfers_total',
    'Total direct-to-storage transfers',
    ['status']
)
