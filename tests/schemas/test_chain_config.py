import pytest

from cipherchain.schemas import MISSING_IV_POLICIES, ChainConfig


def test_chain_config_defaults():
    cfg = ChainConfig()

    assert cfg.missing_iv == "fallback"
    assert cfg.decrypt_workers == 1
    assert cfg.validate_blocks is True


@pytest.mark.parametrize("policy", MISSING_IV_POLICIES)
def test_chain_config_accepts_known_policies(policy):
    assert ChainConfig(missing_iv=policy).missing_iv == policy


def test_chain_config_rejects_unknown_policy():
    with pytest.raises(ValueError):
        ChainConfig(missing_iv="silent")


@pytest.mark.parametrize("workers", [0, -1])
def test_chain_config_rejects_bad_workers(workers):
    with pytest.raises(ValueError):
        ChainConfig(decrypt_workers=workers)
