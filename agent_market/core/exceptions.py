from fastapi import HTTPException, status


class InvalidWalletAddressError(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid wallet address format")


class UserNotFoundError(HTTPException):
    def __init__(self, wallet_address: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {wallet_address} not found")


class UserAlreadyExistsError(HTTPException):
    def __init__(self, wallet_address: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with wallet address {wallet_address} already exists",
        )


class AgentNotFoundError(HTTPException):
    def __init__(self, agent_id: str | int):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Agent {agent_id} not found")


class ExternalIdConflictError(HTTPException):
    def __init__(self, external_id: int):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Agent with smart contract ID {external_id} already exists",
        )


class AgentNotForSaleError(HTTPException):
    def __init__(self, agent_id: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=f"Agent {agent_id} is not for sale")


class AlreadyOwnedError(HTTPException):
    def __init__(self, agent_id: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=f"You already own agent {agent_id}")


class NotAgentCreatorError(HTTPException):
    def __init__(self, agent_id: str):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only the creator can change the sale state of agent {agent_id}",
        )
