import sys
from pathlib import Path


# Ensure the project modules are importable without installation when running tests locally
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
