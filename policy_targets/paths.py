import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("BASE_DIR", Path(__file__).parent.parent))

# Package code
PACKAGE_DIR = BASE_DIR / "policy_targets"
STEP_DIR = PACKAGE_DIR / "ren21"

# Input files (outputs of the external readers and potential calculators)
INPUT_DIR = Path(os.environ.get("INPUT_DIR", BASE_DIR / "input"))

# Data folder (actual data)
DATA_DIR = BASE_DIR / "data"
DATA_GARDEN_DIR = DATA_DIR / "garden"

# Country and region mappings used by the REN21 step
COUNTRIES_FILE = STEP_DIR / "ren21.countries.json"
REGION_MAPPING_FILE = INPUT_DIR / "regionmappingREN2Country.csv"

# Step metadata
METADATA_FILE = STEP_DIR / "capacity_targets.meta.yml"
