"""Shared fixtures: a small fleet with machines in every alert state."""

import pytest

from gestifiltres import Fleet, Machine, MaintenanceRange, MaintenanceRecord, UsedFilter

C, D, E = MaintenanceRange.C, MaintenanceRange.D, MaintenanceRange.E

FLEET_YAML = """
settings:
  urgentHours: 50
  upcomingHours: 100
machines:
- id: m1
  code: PEL-01
  designation: Pelle hydraulique
  brand: Caterpillar
  type: 320D
  serialNumber: CAT0320DKFAL01234
  serviceHours: 1790
- id: m2
  code: CHG-03
  designation: Chargeuse sur pneus
  brand: Volvo
  serviceHours: 2960
- id: m3
  code: NIV-02
  designation: Niveleuse
  serviceHours: 410
- id: m4
  code: COMP-01
  designation: Compacteur
  serviceHours: 120
maintenance:
- id: r1
  machineId: m1
  range: C
  serviceHours: 1000
  date: '2024-02-12'
  filtersUsed:
  - filterTypeId: oil
    referenceId: 1R-0739
    quantity: 1
- id: r2
  machineId: m1
  range: D
  serviceHours: 1252
  date: '2024-04-03'
- id: r3
  machineId: m1
  range: C
  serviceHours: 1500
  date: '2024-05-28'
- id: r4
  machineId: m2
  range: C
  serviceHours: 2250
  date: '2024-01-20'
- id: r5
  machineId: m2
  range: E
  serviceHours: 2500
  date: '2024-03-15'
- id: r6
  machineId: m3
  range: C
  serviceHours: 250
  date: '2024-06-02'
"""


@pytest.fixture
def fleet():
    """
    m1 overdue (threshold 1750h passed), m2 overdue (2750h passed),
    m3 upcoming (90h left), m4 ok (no history, 130h left).
    """
    machines = [
        Machine("m1", "PEL-01", "Pelle hydraulique", 1790, brand="Caterpillar"),
        Machine("m2", "CHG-03", "Chargeuse sur pneus", 2960, brand="Volvo"),
        Machine("m3", "NIV-02", "Niveleuse", 410),
        Machine("m4", "COMP-01", "Compacteur", 120),
    ]
    records = [
        MaintenanceRecord("m1", C, 1000, "2024-02-12", [UsedFilter("oil", "1R-0739")], id="r1"),
        MaintenanceRecord("m1", D, 1252, "2024-04-03", id="r2"),
        MaintenanceRecord("m1", C, 1500, "2024-05-28", id="r3"),
        MaintenanceRecord("m2", C, 2250, "2024-01-20", id="r4"),
        MaintenanceRecord("m2", E, 2500, "2024-03-15", id="r5"),
        MaintenanceRecord("m3", C, 250, "2024-06-02", id="r6"),
    ]
    return Fleet(machines, records)


@pytest.fixture
def fleet_file(tmp_path):
    """The same fleet written to a YAML file."""
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path
