"""
Unit Tests for the PrivacyX Facade and Status Helpers
"""

import pytest

from privacyx import PassConfig, PrivacyX, create_privacyx
from privacyx.blockchain import MockChainClient, Web3ChainClient, reset_chain_client, set_chain_client
from privacyx.config import ChainSettings, Settings
from privacyx.errors import ConfigError, PassNotImplementedError, ProviderError
from privacyx.passes import PassVariant
from privacyx.status import chain_health, default_identity_status, identity_status
from tests.conftest import ISSUER, NULLIFIER, ROOT


@pytest.fixture(autouse=True)
def _reset_global_client():
    reset_chain_client()
    yield
    reset_chain_client()


class TestPrivacyX:
    """Tests for the PrivacyX facade."""

    def test_missing_chain_id(self, chain):
        with pytest.raises(ConfigError, match="Missing chain_id"):
            PrivacyX(provider=chain)

    def test_missing_provider(self):
        with pytest.raises(ProviderError):
            PrivacyX(chain_id=1)

    def test_wiring(self, chain):
        """Test that every pass shares the resolved provider."""
        balance_address = chain.deploy_balance_pass(root=ROOT)

        px = PrivacyX(chain_id=31337, provider=chain, balance_pass_address=balance_address)

        assert px.chain_id == 31337
        assert px.provider is chain
        assert px.balance_pass.provider is chain
        assert px.identity_pass.provider is chain
        assert px.balance_pass.is_configured
        assert px.identity_pass.is_configured is False
        assert px.reputation_pass.variant == PassVariant.NOT_YET_AVAILABLE

    def test_url_provider(self):
        px = PrivacyX(chain_id=1, provider="http://127.0.0.1:8545")

        assert isinstance(px.provider, Web3ChainClient)
        assert px.balance_pass.provider is px.provider

    def test_config_with_overrides(self, chain):
        config = PassConfig(chain_id=1, provider=chain, receipt_timeout_seconds=5)

        px = PrivacyX(config, chain_id=31337)

        assert px.chain_id == 31337
        assert px.balance_pass.receipt_timeout == 5
        assert config.chain_id == 1

    def test_create_privacyx(self, chain):
        px = create_privacyx(chain_id=5, provider=chain)

        assert isinstance(px, PrivacyX)
        assert px.identity_pass.chain_id == 5

    @pytest.mark.asyncio
    async def test_end_to_end(self, chain, signer, proof_json, balance_signals, nullifier_hex):
        address = chain.deploy_balance_pass(root=ROOT, threshold=10)
        px = PrivacyX(chain_id=31337, provider=chain, balance_pass_address=address)

        assert await px.balance_pass.get_threshold() == 10
        await px.balance_pass.submit_proof(signer, proof_json, balance_signals)

        assert await px.balance_pass.has_nullifier_been_used(nullifier_hex) is True

    @pytest.mark.asyncio
    async def test_reputation_pass_rejects(self, chain):
        px = PrivacyX(chain_id=1, provider=chain)

        with pytest.raises(PassNotImplementedError):
            await px.reputation_pass.get_user_score("alice")

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, chain, signer, proof_json, balance_signals):
        """Test that leaving the context drops every listener."""
        address = chain.deploy_balance_pass(root=ROOT)

        async with PrivacyX(chain_id=31337, provider=chain, balance_pass_address=address) as px:
            await px.balance_pass.on_access_granted(lambda event: None)
            assert chain.listener_count(address, "AccessGranted") == 1

        assert chain.listener_count(address, "AccessGranted") == 0

    def test_from_settings(self):
        """Test building the facade from environment settings."""
        settings = Settings(
            chain=ChainSettings(
                mode="mock",
                chain_id=31337,
                identity_pass_address="0x" + "3" * 40,
            )
        )

        px = PrivacyX.from_settings(settings)

        assert isinstance(px.provider, MockChainClient)
        assert px.identity_pass.is_configured
        assert px.balance_pass.is_configured is False

    def test_from_settings_uses_global_client(self, chain):
        set_chain_client(chain)

        px = PrivacyX.from_settings()

        assert px.provider is chain

    def test_from_settings_without_chain_id(self):
        with pytest.raises(ConfigError):
            PrivacyX.from_settings(Settings(chain=ChainSettings(mode="mock", chain_id=None)))

    def test_from_settings_rpc_without_url(self):
        with pytest.raises(ProviderError, match="PRIVACYX_RPC_URL"):
            PrivacyX.from_settings(Settings(chain=ChainSettings(mode="rpc", chain_id=1, rpc_url="")))


class TestStatusHelpers:
    """Tests for status helpers."""

    @pytest.mark.asyncio
    async def test_chain_health(self, chain):
        health = await chain_health(chain)

        assert health == {"status": "ok", "chain_id": 31337, "block_number": 1000}

    @pytest.mark.asyncio
    async def test_chain_health_reports_errors(self, chain):
        chain.fail_next(ConnectionError("node down"))

        health = await chain_health(chain)

        assert health["status"] == "error"
        assert "node down" in health["error"]

    @pytest.mark.asyncio
    async def test_identity_status(self, identity_pass, issuer_hex, nullifier_hex):
        status = await identity_status(identity_pass, issuer_hex, nullifier_hex, expected_root=ROOT)

        assert status.current_root == ROOT
        assert status.nullifier_used is False
        assert status.root_matches is True
        assert status.contract_address == identity_pass.address

    @pytest.mark.asyncio
    async def test_identity_status_without_expected_root(self, identity_pass, issuer_hex, nullifier_hex):
        status = await identity_status(identity_pass, issuer_hex, nullifier_hex)

        assert status.root_matches is None

    @pytest.mark.asyncio
    async def test_default_identity_status(self, identity_pass, signer, proof_json, identity_signals):
        """Test status derived from the signals of a used pass."""
        await identity_pass.submit_proof(signer, proof_json, identity_signals)

        status = await default_identity_status(identity_pass, identity_signals)

        assert status.nullifier_used is True
        assert status.root_matches is True
        assert status.issuer_hex.endswith(format(ISSUER, "x"))
        assert status.nullifier_hex.endswith(format(NULLIFIER, "x"))

    @pytest.mark.asyncio
    async def test_stale_root(self, identity_pass, chain, issuer_hex, identity_signals):
        chain.set_root(identity_pass.address, ROOT + 1, issuer=issuer_hex)

        status = await default_identity_status(identity_pass, identity_signals)

        assert status.root_matches is False
