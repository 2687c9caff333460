#!/usr/bin/env python3
"""
Basic secrets-sync usage example.

Runs a dry run and a real run against the in-memory fake API, so no token
or network access is needed.
Run with: python examples/basic_usage.py
"""

import asyncio
import json

from secrets_sync import Config, ConfigurationError, SecretsSyncError, run
from secrets_sync.crypto import hash_value
from secrets_sync.testing import FakeGitHub

print("=== secrets-sync Basic Usage Example ===\n")

# 1. Test exception hierarchy
print("1. Testing exception classes...")
try:
    raise ConfigurationError("GITHUB_TOKEN is required")
except SecretsSyncError as e:
    print(f"   Caught SecretsSyncError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")

print("\n   OK: Exception classes working\n")

# 2. Audit hashing
print("2. Testing audit hashing...")
digest = hash_value("baz", "salt")
print(f"   hash('baz', 'salt') = {digest}")
assert digest == "b6c1ba0fdd", "Golden digest should not change"

print("\n   OK: Audit hashing working\n")

# 3. Dry run against the fake API
print("3. Dry run...")
fake = FakeGitHub()
for name in ("acme/api", "acme/web", "acme/docs"):
    fake.add_repository(name)

environ = {"DEPLOY_TOKEN": "s3cr3t", "REGION": "eu-west-1"}
config = Config(
    github_token="example-token",
    repositories=["^acme/(api|web)$"],
    repositories_list_regex=True,
    secrets=["^DEPLOY_TOKEN$"],
    variables=["^REGION$"],
    dry_run=True,
)

result = asyncio.run(run(config, environ, transport=fake.transport()))
print(f"   Records: {len(result.records)}, writes: {len(fake.mutating_calls())}")
assert not fake.mutating_calls(), "A dry run must not write"

print("\n   OK: Dry run working\n")

# 4. Real run against the fake API
print("4. Real run...")
config.dry_run = False
result = asyncio.run(run(config, environ, transport=fake.transport()))

for record in result.records:
    print(f"   {json.dumps(record.to_dict())}")

assert result.ok
assert fake.decrypt_secret("acme/api", "DEPLOY_TOKEN") == "s3cr3t"
assert fake.variable_value("acme/web", "REGION") == "eu-west-1"
assert fake.variable_value("acme/docs", "REGION") is None

print("\n   OK: Real run working\n")
