# bodyfat.py
"""U.S. Navy circumference method: input validation and body fat estimation.

Inputs arrive as raw strings (metric: kg / cm / years). The formula itself
works in inches, so linear measurements are converted before use.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# -------- Constants --------
CM_TO_INCHES = 0.393701
LOG_ARGUMENT_THRESHOLD = 0.1
MIN_PERCENT = 0.0
MAX_PERCENT = 100.0

IDLE_MESSAGE = "Enter your measurements to get started!"
SUCCESS_MESSAGE = "Your estimated body fat percentage."


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def from_form(cls, value):
        # form default is male
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.MALE


class Status(str, Enum):
    NEUTRAL = "neutral"
    FAILURE = "failure"


class InputError(Enum):
    """Every way a calculation can fail, with the field to flag (if any)."""

    INVALID_WEIGHT = ("weight", "Please enter a valid, positive number for your Weight (kg).")
    INVALID_HEIGHT = ("height", "Please enter a valid, positive number for your Height (cm).")
    INVALID_WAIST = ("waist", "Please enter a valid, positive number for your Waist circumference (cm).")
    INVALID_NECK = ("neck", "Please enter a valid, positive number for your Neck circumference (cm).")
    INVALID_HIP = ("hip", "For females, please enter a valid, positive number for your Hip circumference (cm).")
    INVALID_AGE = ("age", "Please enter a valid, non-negative number for your Age (years).")
    MALE_CIRCUMFERENCE_ISSUE = (
        None,
        "For men, your waist measurement must be significantly larger than your neck "
        "measurement for an accurate calculation. Please re-check these values.",
    )
    FEMALE_CIRCUMFERENCE_ISSUE = (
        None,
        "For women, the combined waist and hip measurements must be significantly larger "
        "than your neck measurement for an accurate calculation. Please re-check these values.",
    )
    DIVISION_BY_ZERO = (
        None,
        "A calculation error occurred (division by zero). Please ensure your measurements "
        "are realistic and try again.",
    )
    GENERIC_INVALID_INPUT = (None, "Please ensure all fields are filled with valid numeric values.")

    def __init__(self, field, message):
        self.field = field
        self.message = message


@dataclass(frozen=True)
class FormulaCoefficients:
    intercept: float
    circumference_factor: float
    height_factor: float
    numerator: float = 495.0
    offset: float = 450.0


FORMULAS = {
    Sex.MALE: FormulaCoefficients(1.0324, 0.19077, 0.15456),
    Sex.FEMALE: FormulaCoefficients(1.29579, 0.35004, 0.22100),
}


@dataclass(frozen=True)
class ValidatedMeasurements:
    weight: float
    height: float
    waist: float
    neck: float
    age: float
    hip: float = None  # female only


@dataclass(frozen=True)
class EstimationResult:
    percentage: float = None
    error: InputError = None
    message: str = IDLE_MESSAGE
    status: Status = Status.NEUTRAL

    @property
    def ok(self):
        return self.error is None and self.percentage is not None

    @property
    def field(self):
        return None if self.error is None else self.error.field

    @property
    def display(self):
        return format_percentage(self.percentage if self.percentage is not None else MIN_PERCENT)

    @classmethod
    def failure(cls, error, message=None):
        return cls(error=error, message=message or error.message, status=Status.FAILURE)


# -------- Validation --------
def parse_measurement(text, allow_zero=False):
    """Return a float from raw text, or None if it is blank, non-numeric or out of domain."""
    s = str(text if text is not None else "").strip()
    # float() would read "1_80" as 180
    if not s or "_" in s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if allow_zero:
        return value if value >= 0 else None
    return value if value > 0 else None


def validate_inputs(weight, height, waist, neck, hip, age, sex):
    """Validate raw form strings.

    Returns ``(ValidatedMeasurements, None)`` or ``(None, InputError)`` for the
    first bad field, checked in the order weight, height, waist, neck, age, hip.
    Hip is only read for females.
    """
    checks = [
        ("weight", weight, False, InputError.INVALID_WEIGHT),
        ("height", height, False, InputError.INVALID_HEIGHT),
        ("waist", waist, False, InputError.INVALID_WAIST),
        ("neck", neck, False, InputError.INVALID_NECK),
        ("age", age, True, InputError.INVALID_AGE),
    ]
    if sex == Sex.FEMALE:
        checks.append(("hip", hip, False, InputError.INVALID_HIP))

    values = {}
    for name, raw, allow_zero, error in checks:
        value = parse_measurement(raw, allow_zero=allow_zero)
        if value is None:
            logger.debug("rejected %s=%r", name, raw)
            return None, error
        values[name] = value

    return ValidatedMeasurements(**values), None


# -------- Estimation --------
def clamp_percentage(value):
    return max(MIN_PERCENT, min(MAX_PERCENT, value))


def format_percentage(value):
    return f"{value:.1f}"


def _denominator(coefficients, log_argument, height_in):
    return (
        coefficients.intercept
        - coefficients.circumference_factor * math.log10(log_argument)
        + coefficients.height_factor * math.log10(height_in)
    )


def _degenerate():
    return EstimationResult.failure(
        InputError.DIVISION_BY_ZERO,
        "Calculation error. Values might be unrealistic or lead to NaN.",
    )


def estimate_body_fat(measurements, sex):
    """Apply the Navy formula for ``sex`` to already validated measurements."""
    height_in = measurements.height * CM_TO_INCHES
    waist_in = measurements.waist * CM_TO_INCHES
    neck_in = measurements.neck * CM_TO_INCHES

    if sex == Sex.FEMALE:
        if measurements.hip is None:
            logger.debug("female estimate without hip")
            return EstimationResult.failure(InputError.INVALID_HIP, "Hip measurement is unexpectedly missing.")
        hip_in = measurements.hip * CM_TO_INCHES
        log_argument = waist_in + hip_in - neck_in
        if not log_argument > LOG_ARGUMENT_THRESHOLD:
            logger.debug("waist+hip-neck too small: %.4f in", log_argument)
            return EstimationResult.failure(InputError.FEMALE_CIRCUMFERENCE_ISSUE, "Check waist/hip/neck input.")
    else:
        log_argument = waist_in - neck_in
        if not log_argument > LOG_ARGUMENT_THRESHOLD:
            logger.debug("waist-neck too small: %.4f in", log_argument)
            return EstimationResult.failure(InputError.MALE_CIRCUMFERENCE_ISSUE, "Check waist/neck input.")

    # a denormal height underflows to 0.0 in
    if not height_in > 0:
        logger.debug("height underflows to %r in", height_in)
        return _degenerate()

    coefficients = FORMULAS[Sex.FEMALE if sex == Sex.FEMALE else Sex.MALE]
    denominator = _denominator(coefficients, log_argument, height_in)
    if math.isnan(denominator) or denominator == 0:
        logger.debug("degenerate denominator: %r", denominator)
        return _degenerate()

    raw = coefficients.numerator / denominator - coefficients.offset
    return EstimationResult(percentage=clamp_percentage(raw), message=SUCCESS_MESSAGE)


def calculate(weight, height, waist, neck, hip, age, sex):
    """Validate raw strings and estimate in one go."""
    measurements, err = validate_inputs(weight, height, waist, neck, hip, age, sex)
    if err:
        return EstimationResult.failure(err)
    return estimate_body_fat(measurements, sex)
