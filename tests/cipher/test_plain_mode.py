from __future__ import annotations

import pytest
from Crypto.Cipher import AES as RefAES

from cipherchain.cipher import BlockSizeError, PlainMode, TransformError


@pytest.mark.parametrize("nblocks", [0, 1, 2, 4, 8, 16])
def test_plain_encrypt_matches_ecb_reference(
    key, forward, nblocks, randbytes, split_blocks
):
    pt = randbytes(16 * nblocks)

    ct = PlainMode(forward).encrypt(split_blocks(pt))

    assert ct == RefAES.new(key, RefAES.MODE_ECB).encrypt(pt)


@pytest.mark.parametrize("nblocks", [0, 1, 3, 5, 10])
def test_plain_decrypt_with_inverse_transform(
    key, inverse, nblocks, randbytes, split_blocks
):
    pt = randbytes(16 * nblocks)
    ct = RefAES.new(key, RefAES.MODE_ECB).encrypt(pt)

    assert PlainMode(inverse).decrypt(split_blocks(ct)) == pt


def test_plain_identical_blocks_yield_identical_output(
    forward, randbytes, split_blocks
):
    block = randbytes(16)
    c0, c1 = split_blocks(PlainMode(forward).encrypt([block, block]))

    assert c0 == c1


def test_plain_ignores_iv(iv, forward, randbytes, split_blocks):
    blocks = split_blocks(randbytes(48))

    assert PlainMode(forward).encrypt(blocks, iv) == PlainMode(forward).encrypt(blocks)


def test_plain_encrypt_and_decrypt_share_the_algorithm(
    forward, randbytes, split_blocks
):
    blocks = split_blocks(randbytes(32))
    mode = PlainMode(forward)

    assert mode.encrypt(blocks) == mode.decrypt(blocks)


def test_plain_empty_sequence_is_empty_success(forward):
    assert PlainMode(forward).encrypt([]) == b""
    assert PlainMode(forward).decrypt([]) == b""


@pytest.mark.parametrize("fail_at", [0, 2])
def test_plain_failure_aborts_whole_call(
    forward, failing_transform, fail_at, randbytes, split_blocks
):
    with pytest.raises(TransformError) as exc_info:
        PlainMode(failing_transform(forward, fail_at)).encrypt(
            split_blocks(randbytes(48))
        )
    assert exc_info.value.index == fail_at


def test_plain_primitive_error_on_short_block(forward, randbytes):
    # AES in ECB refuses a 5-byte block; that surfaces as a transform failure.
    with pytest.raises(TransformError):
        PlainMode(forward).encrypt([randbytes(16), randbytes(5)])


def test_plain_rejects_non_uniform_blocks(forward, randbytes):
    with pytest.raises(BlockSizeError):
        PlainMode(forward).encrypt([randbytes(16), randbytes(8), randbytes(16)])
