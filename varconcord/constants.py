"""Fixed values shared across varconcord modules."""

REPORT_COLUMNS = [
    "SampleName",
    "ReferenceName",
    "MarkersMatched",
    "FractionMatched",
    "TotalMarkersForSet",
]

NO_CALL_COLUMNS = ["SampleName", "NoCalls"]

PASS_FILTER = "PASS"

# Decimal places used when rendering FractionMatched
FRACTION_DECIMALS = 2
