"""Conf handles reading settings and building the network clients."""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from easyworth.worth.client import WorthClient
from easyworth.worth.prices import PriceClient
from easyworth.worth.connect import ConnectClient

class Settings(BaseSettings):
    """EasyWorth settings, overridable via EASYWORTH_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix='EASYWORTH_', env_file='.env',
        env_file_encoding='utf-8', case_sensitive=False)

    app_id: Optional[str] = Field(default=None, description="WorthConnect app account")
    app_name: str = Field(default='easyworth', description="app name in post metadata")
    app_version: str = Field(default='0.1.0', description="app version in post metadata")

    rpc_url: str = Field(default='https://api.wortheum.news',
                         description="worths JSON-RPC endpoint")
    connect_url: str = Field(default='https://connect.wortheum.news',
                             description="WorthConnect base URL")
    price_url: str = Field(default='https://min-api.cryptocompare.com/data/price',
                           description="price quote endpoint")

    http_timeout: float = Field(default=10.0, description="per-request timeout, seconds")
    props_max_age: Optional[float] = Field(
        default=60.0, description="seconds before cached chain properties go stale")

    log_level: str = Field(default='INFO')

class Conf:
    """Manages app settings and the clients built from them."""

    def __init__(self, settings=None, **overrides):
        settings = settings or Settings()
        if overrides:
            settings = settings.model_copy(update=overrides)
        self._settings = settings
        self._worth = None
        self._prices = None
        self._connect = None

    def get(self, param):
        """Get a setting by name."""
        return getattr(self._settings, param)

    def setup_logging(self):
        logging.basicConfig(
            level=self.get('log_level').upper(),
            format='%(asctime)s %(levelname)-8s %(name)s - %(message)s')

    def worth(self):
        """Get a WorthClient instance, lazily initialized"""
        if not self._worth:
            self._worth = WorthClient(self.get('rpc_url'),
                                      timeout=self.get('http_timeout'))
        return self._worth

    def prices(self):
        if not self._prices:
            self._prices = PriceClient(self.get('price_url'),
                                       timeout=self.get('http_timeout'))
        return self._prices

    def connect(self):
        if not self._connect:
            self._connect = ConnectClient(self.get('app_id'),
                                          self.get('connect_url'),
                                          timeout=self.get('http_timeout'))
        return self._connect
