"""Tests for the shutdown coordinator module."""

import asyncio
import os
import signal
import pytest
from unittest.mock import AsyncMock

from spoterm.modules.shutdown.coordinator import ShutdownCoordinator


@pytest.mark.asyncio
async def test_shutdown_coordinator(mock_logger):
    """Test handlers run in registration order."""
    coordinator = ShutdownCoordinator(mock_logger)
    
    execution_order = []
    
    coordinator.register_handler(
        "cancel_subscription",
        lambda: execution_order.append("cancel")
    )
    coordinator.register_handler(
        "flush_logs",
        lambda: execution_order.append("flush")
    )
    
    await coordinator.shutdown()
    
    assert execution_order == ["cancel", "flush"]
    
    mock_logger.log_info.assert_any_call("Starting graceful shutdown...")
    mock_logger.log_info.assert_any_call("Executing shutdown handler: cancel_subscription")
    mock_logger.log_info.assert_any_call("Executing shutdown handler: flush_logs")
    mock_logger.log_info.assert_any_call("Graceful shutdown completed")

@pytest.mark.asyncio
async def test_register_same_name_replaces_handler(mock_logger):
    """Test registering a handler twice keeps only the latest."""
    coordinator = ShutdownCoordinator(mock_logger)
    first = AsyncMock()
    second = AsyncMock()
    
    coordinator.register_handler("cancel_subscription", first)
    coordinator.register_handler("cancel_subscription", second)
    await coordinator.shutdown()
    
    first.assert_not_called()
    second.assert_awaited_once()

@pytest.mark.asyncio
async def test_double_shutdown(mock_logger):
    """Test that shutdown can only be executed once."""
    coordinator = ShutdownCoordinator(mock_logger)
    
    execution_count = 0
    def increment_count():
        nonlocal execution_count
        execution_count += 1
    
    coordinator.register_handler(
        "test_handler",
        increment_count
    )
    
    await coordinator.shutdown()
    await coordinator.shutdown()
    
    assert execution_count == 1
    assert mock_logger.log_info.call_count == 3  # Start, handler, complete

@pytest.mark.asyncio
async def test_error_handling(mock_logger):
    """Test error handling in shutdown handlers."""
    coordinator = ShutdownCoordinator(mock_logger)
    
    def raise_error():
        raise ValueError("Test error")
    
    coordinator.register_handler(
        "error_handler",
        raise_error
    )
    
    await coordinator.shutdown()
    
    mock_logger.log_error.assert_called_once_with("Error in shutdown handler error_handler: Test error")

@pytest.mark.asyncio
async def test_shutdown_timeout(mock_logger):
    """Test shutdown timeout functionality."""
    coordinator = ShutdownCoordinator(mock_logger, shutdown_timeout=0.1)
    
    async def slow_handler():
        await asyncio.sleep(0.2)
    
    coordinator.register_handler(
        "slow_handler",
        slow_handler
    )
    
    start_time = asyncio.get_running_loop().time()
    await coordinator.shutdown()
    end_time = asyncio.get_running_loop().time()
    
    assert end_time - start_time < 0.2
    mock_logger.log_warning.assert_called_once_with(
        "Shutdown timed out after 0.1 seconds. Some handlers may not have completed gracefully."
    )

def test_run_returns_coroutine_result(mock_logger):
    """Test a coroutine that completes is returned as is and handlers are restored."""
    coordinator = ShutdownCoordinator(mock_logger)
    original_sigint = signal.getsignal(signal.SIGINT)
    original_sigterm = signal.signal(signal.SIGTERM, signal.SIG_DFL)
    
    async def watch():
        await asyncio.sleep(0.01)
        return 0
    
    try:
        assert coordinator.run_async_with_signals(watch()) == 0
        assert signal.getsignal(signal.SIGINT) is original_sigint
        assert signal.getsignal(signal.SIGTERM) == signal.SIG_DFL
    finally:
        signal.signal(signal.SIGTERM, original_sigterm)
    mock_logger.log_info.assert_not_called()

def test_signal_cancels_and_runs_handlers(mock_logger):
    """Test SIGINT cancels the coroutine and runs the handlers."""
    coordinator = ShutdownCoordinator(mock_logger)
    cancel_subscription = AsyncMock()
    
    async def watch():
        coordinator.register_handler("cancel_subscription", cancel_subscription)
        os.kill(os.getpid(), signal.SIGINT)
        await asyncio.sleep(5)
        return 0
    
    assert coordinator.run_async_with_signals(watch()) is None
    assert coordinator.received_signal is signal.SIGINT
    cancel_subscription.assert_awaited_once()
    mock_logger.log_warning.assert_any_call("Received SIGINT, stopping...")

def test_error_runs_handlers_and_reraises(mock_logger):
    """Test handlers still run when the coroutine raises."""
    coordinator = ShutdownCoordinator(mock_logger)
    cancel_subscription = AsyncMock()
    
    async def watch():
        coordinator.register_handler("cancel_subscription", cancel_subscription)
        raise RuntimeError("boom")
    
    with pytest.raises(RuntimeError, match="boom"):
        coordinator.run_async_with_signals(watch())
    
    cancel_subscription.assert_awaited_once()
    mock_logger.log_error.assert_any_call("Error during execution: boom")
