# src/leaksim_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Integration Constants ---

#: Ramp rate of the charging update, in 1/s. The voltage closes this fraction of
#: the remaining gap to the source per second of simulated time. This is a fast
#: visual approach, not the RC charging curve.
CHARGE_RATE_PER_SECOND: float = 10.0

#: Once the gap to the source voltage is below this value the voltage snaps to
#: the source exactly.
CHARGE_SNAP_EPSILON_VOLTS: float = 0.01

#: Host clock readings are in milliseconds; the integrator works in seconds.
MILLISECONDS_PER_SECOND: float = 1000.0

# --- Measurement Constants ---

#: Peak-to-peak width of the uniform voltmeter jitter added to logged samples.
DEFAULT_NOISE_AMPLITUDE_VOLTS: float = 0.05

#: Lowest reading the simulated voltmeter can display.
VOLTMETER_FLOOR_VOLTS: float = 0.0

# --- Host Defaults ---

#: Frame rate of the headless frame clock when none is configured.
DEFAULT_FRAME_RATE_HZ: float = 60.0

# --- Context Snapshot Precision ---
CONTEXT_VOLTAGE_DECIMALS: int = 3
CONTEXT_TIME_DECIMALS: int = 2

logger.debug("Defined core constants: CHARGE_RATE_PER_SECOND, CHARGE_SNAP_EPSILON_VOLTS, DEFAULT_NOISE_AMPLITUDE_VOLTS")
