"""
Configuration test fixtures for the test suite.

Contains configuration samples for testing the Dgraph client, the pipeline
and the CLI.
"""

# =============================================================================
# Configuration Fixtures
# =============================================================================

SAMPLE_CONFIG = {
    "dgraph": {
        "url": "http://dgraph.example:8080",
        "timeout": 10,
        "max_retries": 3,
        "retry_backoff": 0
    },
    "output": {
        "directory": "./data",
        "schema_file": "schema.txt",
        "profile_file": "output.txt"
    },
    "schema": {
        "index_identity": False
    },
    "logging": {
        "level": "INFO",
        "file": "logs/test.log",
        "format": "text",
        "rotation": {
            "enabled": True,
            "max_mb": 10,
            "backup_count": 5
        }
    }
}

MINIMAL_CONFIG = {
    "dgraph": {
        "url": "http://localhost:8080"
    }
}

INVALID_URL_CONFIG = {
    "dgraph": {
        "url": "ftp://localhost:8080"
    }
}
