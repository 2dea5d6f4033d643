"""Domain layer: entities, typed failures and the account state machine."""
