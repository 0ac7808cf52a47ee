"""
Supabase access for Bloom.

Growth and nutrition logs are written by the app; Bloom only reads them,
through the anon key so Row Level Security still scopes rows to the caller.
"""

import os
from typing import Optional

from supabase import create_client, Client

URL_VAR = "SUPABASE_URL"
KEY_VAR = "SUPABASE_ANON_KEY"


class SupabaseConfig:
  """Connection settings taken from the environment."""

  def __init__(self):
    self.url = os.environ.get(URL_VAR)
    self.anon_key = os.environ.get(KEY_VAR)

  @property
  def is_configured(self) -> bool:
    return bool(self.url and self.anon_key)

  def validate(self) -> None:
    """Raise ValueError naming the first missing variable."""
    for name, value in ((URL_VAR, self.url), (KEY_VAR, self.anon_key)):
      if not value:
        raise ValueError(f"{name} environment variable not set")


class SupabaseClient:
  """Read access to Bloom's log tables."""

  def __init__(self, client: Client):
    self._client = client

  @property
  def client(self) -> Client:
    return self._client

  def table(self, name: str):
    """Start a query on a table."""
    return self._client.table(name)


_client: Optional[SupabaseClient] = None


def is_configured() -> bool:
  """Check the environment without raising."""
  return SupabaseConfig().is_configured


def get_client() -> SupabaseClient:
  """Get the shared client, connecting on first use."""
  global _client
  if _client is None:
    config = SupabaseConfig()
    config.validate()
    _client = SupabaseClient(create_client(config.url, config.anon_key))
  return _client
