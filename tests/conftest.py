import pandas as pd
import pytest
from owid.catalog import Table


@pytest.fixture
def tb_survey():
    # Targets of two countries, already with ISO3 codes.
    records = [
        # Wind total installed capacity target, split into onshore and offshore.
        ("AAA", 2030, "TIC-Absolute", "Wind_ON", 10.0),
        ("AAA", 2030, "TIC-Absolute", "Wind_OFF", 2.0),
        # Additional solar capacity in an off-cycle year.
        ("AAA", 2022, "AC-Absolute", "SolarPV", 4.0),
        # Biomass production target, equivalent to 3 GW with a capacity factor of 0.75.
        ("AAA", 2020, "Production-Absolute", "Biomass", 8760 * 0.75 * 3),
        # Solar production target (GWh), converted using potential bins.
        ("BBB", 2030, "Production-Absolute", "SolarPV", 30000.0),
        # Additional wind capacity with respect to 2010.
        ("BBB", 2030, "AC-Absolute", "Base year", 2010),
        ("BBB", 2030, "AC-Absolute", "Wind", 1.0),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "year", "target_type", "technology", "value"]))


@pytest.fixture
def tb_capacity():
    # Historical capacity in MW.
    records = [
        ("AAA", 2015, "Hydropower", 2000.0),
        ("AAA", 2015, "Onshore wind energy", 5000.0),
        ("AAA", 2015, "Offshore wind energy", 1000.0),
        ("AAA", 2015, "Solar photovoltaic", 1000.0),
        ("AAA", 2015, "Bioenergy", 500.0),
        ("AAA", 2015, "Renewable energy", 9500.0),
        ("BBB", 2010, "Wind energy", 1000.0),
        ("BBB", 2010, "Solar photovoltaic", 500.0),
        ("BBB", 2015, "Wind energy", 3000.0),
        ("BBB", 2015, "Solar photovoltaic", 2000.0),
        ("CCC", 2015, "Hydropower", 1000.0),
        ("CCC", 2015, "Solar photovoltaic", 100.0),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "year", "technology", "capacity"]))


@pytest.fixture
def tb_generation():
    # Historical generation in GWh. Both AAA and CCC run their hydropower plants half of the time.
    records = [
        ("AAA", 2015, "Hydropower", 8760.0),
        ("CCC", 2015, "Hydropower", 4380.0),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "year", "technology", "generation"]))


@pytest.fixture
def tb_wind():
    records = [
        ("AAA", "maxprod", 1, 0.2),
        ("AAA", "nur", 1, 0.3),
        ("BBB", "maxprod", 1, 0.1),
        ("BBB", "nur", 1, 0.25),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "type", "bin", "value"]))


@pytest.fixture
def tb_hydro():
    records = [
        ("AAA", "maxprod", 1, 0.01),
        ("AAA", "nur", 1, 0.5),
        ("AAA", "maxprod", 2, 0.1),
        ("AAA", "nur", 2, 0.4),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "type", "bin", "value"]))


@pytest.fixture
def tb_solar():
    records = [
        ("BBB", "spv", "maxprod", 1, 0.05),
        ("BBB", "spv", "nur", 1, 0.2),
        ("BBB", "spv", "maxprod", 2, 0.1),
        ("BBB", "spv", "nur", 2, 0.1),
        ("JPN", "spv", "maxprod", 1, 0.3),
        ("JPN", "spv", "nur", 1, 0.15),
        ("JPN", "csp", "maxprod", 1, 0.02),
        ("JPN", "csp", "nur", 1, 0.35),
        # Data that is not used in the conversion.
        ("JPN", "spv", "area", 1, 123.0),
    ]
    return Table(pd.DataFrame.from_records(records, columns=["country", "technology", "type", "bin", "value"]))
