"""
Report installed versions of the service and test dependencies
"""

import sys
from importlib import metadata

# distribution name -> required at runtime
DISTRIBUTIONS = {
    "fastapi": True,
    "uvicorn": True,
    "pydantic": True,
    "pydantic-settings": True,
    "python-dotenv": True,
    "boto3": True,
    "botocore": True,
    "numpy": True,
    "httpx": False,
    "pytest": False,
    "pytest-asyncio": False,
}


def check_dependencies() -> bool:
    missing = []
    for dist, required in DISTRIBUTIONS.items():
        try:
            version = metadata.version(dist)
        except metadata.PackageNotFoundError:
            version = None
            if required:
                missing.append(dist)
        kind = "runtime" if required else "test"
        print(f"  {dist:<20} {version or 'MISSING':<12} ({kind})")

    if missing:
        print(f"\nMissing runtime dependencies: {', '.join(missing)}")
        print("Install with: pip install -e '.[test]'")
        return False
    print("\nRuntime dependencies are installed.")
    return True


if __name__ == "__main__":
    sys.exit(0 if check_dependencies() else 1)
