"""LifeOS - state-driven task and calendar modulation."""
