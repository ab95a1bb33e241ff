import pytest

from shardshortener.dao.file import ShardRegistry
from shardshortener.utils import Config


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(url_base='http://localhost:8080/', shard='default', data_dir=tmp_path)


@pytest.fixture
def registry(tmp_path) -> ShardRegistry:
    return ShardRegistry(data_dir=tmp_path)
