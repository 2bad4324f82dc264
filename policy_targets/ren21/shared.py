"""Constants shared by the REN21 conversion modules."""

# Model years of the energy model that consumes the targets.
MODEL_YEARS = [2020, 2025, 2030, 2035, 2040]
# Year of the historical data used as a baseline.
HISTORICAL_YEAR = 2015
# Targets given in off-cycle years grow by this fraction per year until the next model year.
OFF_CYCLE_GROWTH_RATE = 0.05

# Conversion factors.
# Hours in a year.
HOURS_PER_YEAR = 8760
# Megawatts to gigawatts.
MW_TO_GW = 1e-3
# Exajoules to gigawatt-hours.
EJ_TO_GWH = 277777.778

# Capacity factors of the energy model for technologies with production targets but no potential bins.
CAPACITY_FACTOR_BIOMASS = 0.75
CAPACITY_FACTOR_GEOTHERMAL = 0.8

# Target types in the REN21 database.
TARGET_ADDITIONAL = "AC-Absolute"
TARGET_TOTAL = "TIC-Absolute"
TARGET_PRODUCTION = "Production-Absolute"
TARGET_TYPES = [TARGET_ADDITIONAL, TARGET_TOTAL, TARGET_PRODUCTION]
# Pseudo-technology of additional capacity targets, holding the base year of the target.
BASE_YEAR = "Base year"

# Technologies kept in the output, in output order.
TECHNOLOGIES = ["SolarPV", "SolarCSP", "Wind", "Hydro", "Biomass", "Geothermal"]
# Technologies whose production targets are converted to capacity using potential bins.
TECHNOLOGIES_WITH_POTENTIALS = ["SolarPV", "SolarCSP", "Wind", "Hydro"]
# Onshore and offshore wind are not distinguished in the model.
WIND_COMPONENTS = ["Wind_ON", "Wind_OFF"]
# All technology labels accepted in the survey.
SURVEY_TECHNOLOGIES = TECHNOLOGIES + WIND_COMPONENTS + [BASE_YEAR]

# Technology names of the energy model.
MODEL_TECHNOLOGY_NAMES = {
    "SolarPV": "spv",
    "SolarCSP": "csp",
    "Wind": "wind",
    "Hydro": "hydro",
    "Biomass": "biochp",
    "Geothermal": "geohdr",
}

# Types of data in the potential tables.
POTENTIAL_MAXPROD = "maxprod"
POTENTIAL_NUR = "nur"
POTENTIAL_TYPES = [POTENTIAL_MAXPROD, POTENTIAL_NUR]
