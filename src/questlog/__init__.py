"""Game library reconciliation and IGDB-backed game entry resolution."""
