"""
Declarative table of ``cfx_*`` and ``debug_*`` methods.

Each entry only says how arguments and results are shaped; the dispatcher
does the rest. Address arguments go through the client's network-aware
address formatter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from cfx_rpc import format
from cfx_rpc.errors import LogFilterError
from cfx_rpc.format import Formatter
from cfx_rpc.rpc.registry import MethodDescriptor
from cfx_rpc.types import formatters as cfx_format

if TYPE_CHECKING:
    from cfx_rpc.client import ConfluxClient


def check_log_filter(options: Optional[Dict[str, Any]] = None, *_: Any) -> None:
    """Reject filters that combine ``blockHashes`` with an epoch range."""
    if not options:
        return
    if options.get("blockHashes") is not None and (
        options.get("fromEpoch") is not None or options.get("toEpoch") is not None
    ):
        present = [key for key in ("blockHashes", "fromEpoch", "toEpoch") if options.get(key) is not None]
        raise LogFilterError(*present)


def cfx_methods(client: ConfluxClient) -> List[MethodDescriptor]:
    """Build the method table bound to ``client``'s formatters."""
    address = Formatter(client.format_address, "address")
    get_logs = Formatter(client.format_get_logs, "get_logs")
    epoch_or_none = format.epoch_number_or_undefined
    epoch_or_hash = format.epoch_number_or_block_hash

    return [
        MethodDescriptor("cfx_clientVersion"),
        MethodDescriptor(
            "cfx_getSupplyInfo",
            request_formatters=(epoch_or_none,),
            response_formatter=cfx_format.supply_info,
        ),
        MethodDescriptor(
            "cfx_getStatus",
            response_formatter=cfx_format.status,
        ),
        MethodDescriptor(
            "cfx_gasPrice",
            alias="getGasPrice",
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_maxPriorityFeePerGas",
            alias="maxPriorityFeePerGas",
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getFeeBurnt",
            alias="getFeeBurnt",
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_feeHistory",
            alias="feeHistory",
            request_formatters=(
                format.big_uint_hex,
                format.epoch_number,
                format.any_,  # reward percentiles, floats
            ),
            response_formatter=cfx_format.fee_history,
        ),
        MethodDescriptor(
            "cfx_getInterestRate",
            request_formatters=(epoch_or_none,),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getAccumulateInterestRate",
            request_formatters=(epoch_or_none,),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getAccount",
            request_formatters=(address, epoch_or_none),
            response_formatter=cfx_format.account,
        ),
        MethodDescriptor(
            "cfx_getBalance",
            request_formatters=(address, epoch_or_hash),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getStakingBalance",
            request_formatters=(address, epoch_or_none),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getNextNonce",
            request_formatters=(address, epoch_or_hash),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getAdmin",
            request_formatters=(address, epoch_or_none),
        ),
        MethodDescriptor(
            "cfx_getVoteList",
            request_formatters=(address, epoch_or_none),
            response_formatter=cfx_format.vote_list,
        ),
        MethodDescriptor(
            "cfx_getDepositList",
            request_formatters=(address, epoch_or_none),
            response_formatter=cfx_format.deposit_list,
        ),
        MethodDescriptor(
            "cfx_epochNumber",
            alias="getEpochNumber",
            request_formatters=(epoch_or_none,),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_getBlockByEpochNumber",
            request_formatters=(format.epoch_number, format.boolean),
            response_formatter=cfx_format.block.or_null(),
        ),
        MethodDescriptor(
            "cfx_getBlockByBlockNumber",
            request_formatters=(format.big_uint_hex, format.boolean),
            response_formatter=cfx_format.block.or_null(),
        ),
        MethodDescriptor(
            "cfx_getBlocksByEpoch",
            alias="getBlocksByEpochNumber",
            request_formatters=(format.epoch_number,),
        ),
        MethodDescriptor(
            "cfx_getBlockRewardInfo",
            request_formatters=(format.epoch_number,),
            response_formatter=cfx_format.reward_info,
        ),
        MethodDescriptor("cfx_getBestBlockHash"),
        MethodDescriptor(
            "cfx_getBlockByHash",
            request_formatters=(format.block_hash, format.boolean),
            response_formatter=cfx_format.block.or_null(),
        ),
        MethodDescriptor(
            "cfx_getBlockByHashWithPivotAssumption",
            request_formatters=(format.block_hash, format.block_hash, format.epoch_number),
            response_formatter=cfx_format.block,
        ),
        MethodDescriptor(
            "cfx_getConfirmationRiskByHash",
            request_formatters=(format.block_hash,),
            response_formatter=format.fixed64.or_null(),
        ),
        MethodDescriptor(
            "cfx_getTransactionByHash",
            request_formatters=(format.transaction_hash,),
            response_formatter=cfx_format.transaction.or_null(),
        ),
        MethodDescriptor(
            "cfx_getTransactionReceipt",
            request_formatters=(format.transaction_hash,),
            response_formatter=cfx_format.receipt.or_null(),
        ),
        MethodDescriptor(
            "cfx_sendRawTransaction",
            request_formatters=(format.hex_,),
        ),
        MethodDescriptor(
            "cfx_getCode",
            request_formatters=(address, epoch_or_hash),
            response_formatter=format.any_,
        ),
        MethodDescriptor(
            "cfx_getStorageAt",
            request_formatters=(address, format.hex64, epoch_or_hash),
        ),
        MethodDescriptor(
            "cfx_getStorageRoot",
            request_formatters=(address, epoch_or_none),
        ),
        MethodDescriptor(
            "cfx_getSponsorInfo",
            request_formatters=(address, epoch_or_none),
            response_formatter=cfx_format.sponsor_info,
        ),
        MethodDescriptor(
            "cfx_getAccountPendingInfo",
            request_formatters=(address,),
            response_formatter=cfx_format.account_pending_info,
        ),
        MethodDescriptor(
            "cfx_getAccountPendingTransactions",
            request_formatters=(
                address,
                format.big_uint_hex.or_null(),
                format.big_uint_hex.or_null(),
            ),
            response_formatter=cfx_format.account_pending_transactions,
        ),
        MethodDescriptor(
            "cfx_getCollateralForStorage",
            request_formatters=(address, epoch_or_none),
            response_formatter=format.big_uint,
        ),
        MethodDescriptor(
            "cfx_checkBalanceAgainstTransaction",
            request_formatters=(
                address,
                address,
                format.big_uint_hex,
                format.big_uint_hex,
                format.big_uint_hex,
                epoch_or_none,
            ),
            response_formatter=format.any_,
        ),
        MethodDescriptor(
            "cfx_getLogs",
            before_hook=check_log_filter,
            request_formatters=(get_logs,),
            response_formatter=cfx_format.logs,
        ),
        MethodDescriptor(
            "cfx_getPoSEconomics",
            response_formatter=cfx_format.pos_economics,
        ),
        MethodDescriptor(
            "cfx_getParamsFromVote",
            request_formatters=(epoch_or_none,),
            response_formatter=cfx_format.vote_params_info,
        ),
        MethodDescriptor(
            "cfx_getCollateralInfo",
            request_formatters=(epoch_or_none,),
            response_formatter=cfx_format.collateral_info,
        ),
        MethodDescriptor(
            "cfx_newFilter",
            before_hook=check_log_filter,
            request_formatters=(get_logs,),
        ),
        MethodDescriptor("cfx_newBlockFilter"),
        MethodDescriptor("cfx_newPendingTransactionFilter"),
        MethodDescriptor(
            "cfx_getFilterChanges",
            request_formatters=(format.hex32,),
            response_formatter=cfx_format.filter_changes,
        ),
        MethodDescriptor(
            "cfx_getFilterLogs",
            request_formatters=(format.hex32,),
            response_formatter=cfx_format.logs,
        ),
        MethodDescriptor(
            "cfx_uninstallFilter",
            request_formatters=(format.hex32,),
        ),
        MethodDescriptor(
            "cfx_getEpochReceipts",
            debug=True,
            request_formatters=(format.epoch_number, format.boolean.or_null()),
            response_formatter=cfx_format.epoch_receipts,
        ),
        MethodDescriptor(
            "debug_getTransactionsByEpoch",
            debug=True,
            request_formatters=(format.big_uint_hex,),
            response_formatter=cfx_format.transactions,
        ),
        MethodDescriptor(
            "debug_getTransactionsByBlock",
            debug=True,
            request_formatters=(format.block_hash,),
            response_formatter=cfx_format.transactions,
        ),
        MethodDescriptor(
            "debug_getEpochReceiptProofByTransaction",
            debug=True,
            request_formatters=(format.transaction_hash,),
        ),
    ]
