from __future__ import annotations

from typing import Dict, List, Mapping, Optional

DEFAULT_COMPONENT_HOURS: Dict[str, int] = {
    "HVAC_Compressor": 2450,
    "Air_Handler": 1800,
    "Chiller": 3200,
    "Boiler": 1500,
}


class MaintenanceAdvisor:
    """Flags plant components whose running hours exceed the service interval."""

    def __init__(
        self,
        component_hours: Optional[Mapping[str, int]] = None,
        threshold_hours: int = 2000,
    ) -> None:
        source = DEFAULT_COMPONENT_HOURS if component_hours is None else component_hours
        self.component_hours: Dict[str, int] = dict(source)
        self.threshold_hours = threshold_hours

    def due_components(self) -> List[str]:
        return [
            name for name, hours in self.component_hours.items() if hours > self.threshold_hours
        ]
