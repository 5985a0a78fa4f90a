"""Custom errors for the risk-control model"""

class ProtocolError(Exception):
    """Base error class for protocol errors"""
    pass

class ArithmeticError(ProtocolError):
    """Error for arithmetic overflow/underflow"""
    pass

class InvalidAmountError(ProtocolError):
    """Error for negative or otherwise unusable token amounts"""
    pass

class AlreadyInitializedError(ProtocolError):
    """Error for a second initialization of a deployment"""
    pass

# Access control

class AdminError(ProtocolError):
    """Base error class for access control failures"""
    pass

class UnauthorizedError(AdminError):
    """Caller is neither the admin nor a holder of the required role"""
    pass

# Risk management

class RiskManagementError(ProtocolError):
    """Base error class for risk parameter operations"""
    pass

class RiskUnauthorizedError(RiskManagementError):
    """Authorization failure surfaced by a risk parameter operation"""
    pass

class ParameterChangeTooLargeError(RiskManagementError):
    """A supplied parameter moves further than the allowed relative change"""

    def __init__(self, field: str, current: int, proposed: int):
        self.field = field
        self.current = current
        self.proposed = proposed
        super().__init__(f"{field}: change {current} -> {proposed} exceeds the allowed bound")

class ParameterOutOfRangeError(RiskManagementError):
    """A supplied parameter falls outside its absolute range"""

    def __init__(self, field: str, proposed: int):
        self.field = field
        self.proposed = proposed
        super().__init__(f"{field}: {proposed} is outside the allowed range")

class InvalidCollateralRatioError(RiskManagementError):
    """Minimum collateral ratio would not exceed the liquidation threshold"""
    pass

class NotInitializedError(RiskManagementError):
    """Risk parameters were read before initialization"""
    pass
