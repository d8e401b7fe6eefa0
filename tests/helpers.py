"""Constants shared by the test modules."""

TEST_SECRET = "test-token-secret"
FIXED_NOW = 1_700_000_000
