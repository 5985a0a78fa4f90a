# Fixed point scale factors
BPS_SCALE = 10_000  # Basis points (100% = 10000)
U128_MAX = 2**128 - 1  # Widest intermediate allowed in checked math

# Risk parameter defaults
DEFAULT_MIN_COLLATERAL_RATIO = 11_000    # 110% in bps
DEFAULT_LIQUIDATION_THRESHOLD = 10_500   # 105% in bps
DEFAULT_CLOSE_FACTOR = 5_000             # 50% in bps
DEFAULT_LIQUIDATION_INCENTIVE = 1_000    # 10% in bps

# Governance limits
MAX_PARAMETER_CHANGE_BPS = 1_000  # 10% max relative change per update
MAX_CAPPED_PARAMETER_BPS = BPS_SCALE  # close factor / incentive ceiling

# Event topics
TOPIC_ADMIN_CHANGED = "admin_changed"
TOPIC_ROLE_GRANTED = "role_granted"
TOPIC_ROLE_REVOKED = "role_revoked"
TOPIC_RISK_PARAMS_CHANGED = "risk_params_changed"

# Well-known roles
ORACLE_ADMIN_ROLE = "oracle_admin"
