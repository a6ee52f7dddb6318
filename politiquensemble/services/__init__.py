"""Business logic, one service class per area."""
