from app.engine.innings_controller import InningsController, SwingResult
from app.engine.deliveries import Delivery, DeliveryScheduler, timing_hint
from app.engine.innings import InningsState, InningsSnapshot, InningsPhase
from app.engine.outcomes import Outcome, OutcomeBand, OUTCOME_BANDS, classify

__all__ = [
    "InningsController",
    "SwingResult",
    "Delivery",
    "DeliveryScheduler",
    "timing_hint",
    "InningsState",
    "InningsSnapshot",
    "InningsPhase",
    "Outcome",
    "OutcomeBand",
    "OUTCOME_BANDS",
    "classify",
]
