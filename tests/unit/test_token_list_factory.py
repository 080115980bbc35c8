from unittest.mock import MagicMock

import pytest

from token_list_engine.app.application.services.build_token_entry import TokenEntryBuilder
from token_list_engine.app.application.services.classify_token import TokenClassifier
from token_list_engine.app.infrastructure.factories.token_list_factory import (
    token_classifier_factory,
    token_entry_builder_factory,
)


@pytest.fixture
def clients():
    return {1: MagicMock(), 59144: MagicMock()}


class TestTokenListFactory:
    def test_web3_classifier(self, clients):
        classifier = token_classifier_factory(backend="web3", clients=clients)

        assert isinstance(classifier, TokenClassifier)
        clients[1].eth.contract.assert_called_once()
        clients[59144].eth.contract.assert_called_once()

    def test_web3_entry_builder(self, clients):
        builder = token_entry_builder_factory(backend="web3", clients=clients, http_client=MagicMock())

        assert isinstance(builder, TokenEntryBuilder)

    def test_unknown_backend(self, clients):
        with pytest.raises(ValueError, match="Unsupported token classifier backend"):
            token_classifier_factory(backend="graphql", clients=clients)

        with pytest.raises(ValueError, match="Unsupported token entry builder backend"):
            token_entry_builder_factory(backend="graphql", clients=clients, http_client=MagicMock())
