import os
import tempfile

# Keep test runs from writing log files into the real home directory
os.environ.setdefault("DROPONOFF_LOG_DIR", tempfile.mkdtemp(prefix="droponoff-logs-"))
