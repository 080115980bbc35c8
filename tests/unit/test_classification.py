"""Tests for the pure bridge classification rules."""

from datetime import date

import pytest

from factories import ETHEREUM_APE, LINEA_APE, linea_token_data, mappings
from token_list_engine.app.domain.addresses import RESERVED_STATUS_ADDRESS, normalize_address
from token_list_engine.app.domain.classification import (
    apply_verification,
    bridged_token_address,
    classify_bridged_token_type,
)
from token_list_engine.app.domain.models import (
    BridgedVerification,
    NativeVerification,
    RootRef,
    TokenMetadata,
    TokenType,
    parse_token,
)

OTHER = normalize_address("0x" + "ab" * 20)


def classify(m, previous=()):
    return classify_bridged_token_type(
        m,
        root_address=ETHEREUM_APE,
        previous_types=previous,
        reserved_sentinel=RESERVED_STATUS_ADDRESS,
    )


class TestClassifyBridgedTokenType:
    @pytest.mark.parametrize(
        "m",
        [
            mappings(l1_root_status=RESERVED_STATUS_ADDRESS),
            mappings(l2_bridged=RESERVED_STATUS_ADDRESS),
            mappings(l1_reverse=RESERVED_STATUS_ADDRESS),
            mappings(l1_root_status=RESERVED_STATUS_ADDRESS, l2_bridged=LINEA_APE, l1_reverse=ETHEREUM_APE),
        ],
    )
    def test_sentinel_anywhere_means_reserved(self, m):
        assert classify(m) == (TokenType.BRIDGE_RESERVED,)

    def test_sentinel_match_is_case_insensitive(self):
        m = mappings(l2_bridged=RESERVED_STATUS_ADDRESS.lower())

        assert classify(m) == (TokenType.BRIDGE_RESERVED,)

    @pytest.mark.parametrize("l2_bridged", [LINEA_APE, OTHER])
    def test_l2_forward_mapping_means_canonical(self, l2_bridged):
        assert classify(mappings(l2_bridged=l2_bridged)) == (TokenType.CANONICAL_BRIDGE,)

    def test_l1_reverse_mapping_to_root_means_canonical(self):
        assert classify(mappings(l1_reverse=ETHEREUM_APE)) == (TokenType.CANONICAL_BRIDGE,)

    def test_l1_reverse_mapping_elsewhere_is_external(self):
        assert classify(mappings(l1_reverse=OTHER)) == (TokenType.EXTERNAL_BRIDGE,)

    def test_no_mapping_means_external(self):
        assert classify(mappings()) == (TokenType.EXTERNAL_BRIDGE,)

    def test_previous_external_tag_kept_next_to_reserved(self):
        m = mappings(l1_root_status=RESERVED_STATUS_ADDRESS)

        assert classify(m, previous=[TokenType.EXTERNAL_BRIDGE]) == (
            TokenType.BRIDGE_RESERVED,
            TokenType.EXTERNAL_BRIDGE,
        )

    def test_previous_external_tag_dropped_when_canonical(self):
        m = mappings(l2_bridged=LINEA_APE)

        assert classify(m, previous=[TokenType.EXTERNAL_BRIDGE]) == (TokenType.CANONICAL_BRIDGE,)

    def test_previous_external_tag_not_duplicated(self):
        assert classify(mappings(), previous=[TokenType.EXTERNAL_BRIDGE]) == (TokenType.EXTERNAL_BRIDGE,)

    def test_custom_sentinel(self):
        sentinel = normalize_address("0x222")

        result = classify_bridged_token_type(
            mappings(l1_root_status=RESERVED_STATUS_ADDRESS, l2_bridged=sentinel),
            root_address=ETHEREUM_APE,
            previous_types=(),
            reserved_sentinel=sentinel,
        )

        assert result == (TokenType.BRIDGE_RESERVED,)


class TestApplyVerification:
    def _skeleton(self, **overrides):
        data = linea_token_data(
            chainId=59144,
            chainURI="",
            tokenId="",
            tokenType=[],
            name="Token A",
            symbol="TA",
            decimals=18,
            **overrides,
        )
        data["extension"]["rootChainURI"] = ""
        return parse_token(data)

    def test_linea_bridged_token_gets_linea_uris(self):
        address = LINEA_APE
        metadata = TokenMetadata(address=address, name="Token A", symbol="TA", decimals=18)
        verification = BridgedVerification(
            address=address,
            chain_id=59144,
            metadata=metadata,
            root=RootRef(chain_id=1, address=ETHEREUM_APE),
            token_type=(TokenType.CANONICAL_BRIDGE,),
        )

        token = apply_verification(self._skeleton(), verification)

        assert token.token_type == [TokenType.CANONICAL_BRIDGE]
        assert token.chain_uri == "https://lineascan.build/block/0"
        assert token.token_id == f"https://lineascan.build/address/{address}"
        assert token.extension.root_chain_id == 1
        assert token.extension.root_chain_uri == "https://etherscan.io/block/0"
        assert token.extension.root_address == ETHEREUM_APE

    def test_ethereum_token_gets_the_mirror_uris(self):
        metadata = TokenMetadata(address=ETHEREUM_APE, name="Token A", symbol="TA", decimals=18)
        verification = BridgedVerification(
            address=ETHEREUM_APE,
            chain_id=1,
            metadata=metadata,
            root=RootRef(chain_id=59144, address=LINEA_APE),
            token_type=(TokenType.CANONICAL_BRIDGE,),
        )

        token = apply_verification(self._skeleton(), verification)

        assert token.chain_id == 1
        assert token.chain_uri == "https://etherscan.io/block/0"
        assert token.token_id == f"https://etherscan.io/address/{ETHEREUM_APE}"
        assert token.extension.root_chain_id == 59144
        assert token.extension.root_chain_uri == "https://lineascan.build/block/0"
        assert token.extension.root_address == LINEA_APE

    def test_native_verification_drops_extension(self):
        metadata = TokenMetadata(address=LINEA_APE, name="Native", symbol="NTV", decimals=6)
        verification = NativeVerification(address=LINEA_APE, chain_id=59144, metadata=metadata)

        token = apply_verification(self._skeleton(), verification)

        assert token.token_type == [TokenType.NATIVE]
        assert token.extension is None
        assert token.decimals == 6

    def test_unverified_fields_are_carried_over(self):
        metadata = TokenMetadata(address=LINEA_APE, name="Token A", symbol="TA", decimals=18)
        verification = NativeVerification(address=LINEA_APE, chain_id=59144, metadata=metadata)
        skeleton = self._skeleton()

        token = apply_verification(skeleton, verification)

        assert token.created_at == skeleton.created_at == date(2023, 8, 8)
        assert token.logo_uri == skeleton.logo_uri


class TestBridgedTokenAddress:
    def _address(self, m, token_type):
        return bridged_token_address(
            m,
            token_type=token_type,
            reserved_sentinel=RESERVED_STATUS_ADDRESS,
        )

    def test_canonical_token_uses_l2_mapping(self):
        assert self._address(mappings(l2_bridged=OTHER.lower()), (TokenType.CANONICAL_BRIDGE,)) == OTHER

    def test_zero_mapping(self):
        assert self._address(mappings(l1_reverse=ETHEREUM_APE), (TokenType.CANONICAL_BRIDGE,)) is None

    @pytest.mark.parametrize(
        "token_type",
        [(TokenType.EXTERNAL_BRIDGE,), (TokenType.BRIDGE_RESERVED, TokenType.EXTERNAL_BRIDGE)],
    )
    def test_non_canonical_results(self, token_type):
        assert self._address(mappings(l2_bridged=LINEA_APE), token_type) is None

    def test_sentinel_mapping(self):
        m = mappings(l2_bridged=RESERVED_STATUS_ADDRESS)

        assert self._address(m, (TokenType.CANONICAL_BRIDGE,)) is None
