"""VerGolf authentication and onboarding API."""
