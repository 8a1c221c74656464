from prometheus_client import Counter, Histogram

# Low-cardinality labels only: outcome is success / failed
PART_UPLOADS = Counter(
    "s3file_part_uploads_total",
    "Total multipart part uploads",
    ["outcome"],
)

PART_LATENCY = Histogram(
    "s3file_part_upload_duration_seconds",
    "Part upload latency in seconds",
)

UPLOADED_BYTES = Counter(
    "s3file_uploaded_bytes_total",
    "Bytes sent in successfully uploaded parts",
)

# outcome: completed / aborted / abort_failed
UPLOADS = Counter(
    "s3file_uploads_total",
    "Multipart uploads by final outcome",
    ["outcome"],
)
