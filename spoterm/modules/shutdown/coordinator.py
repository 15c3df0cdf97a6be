"""Shutdown coordinator that runs a watcher coroutine and stops it on SIGINT/SIGTERM."""

import asyncio
from asyncio import AbstractEventLoop, Task
import signal
from typing import Callable, Dict, Optional, TypeVar, Any, Coroutine, cast, Generic, Union
import types

from ..logging import BaseLogger

T = TypeVar('T')

SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]

class ShutdownCoordinator(Generic[T]):
    """Runs a coroutine until it completes or a termination signal arrives."""
    
    def __init__(self, logger: BaseLogger, shutdown_timeout: float = 5.0):
        """
        Initialize the shutdown coordinator.
        
        Args:
            logger: Logger instance for logging shutdown events
            shutdown_timeout: Timeout in seconds to wait for the handlers.
                Should exceed the probe timeout so an in-flight probe can end.
        """
        self._handlers: Dict[str, Callable] = {}
        self._is_shutting_down = False
        self.logger = logger
        self.shutdown_timeout = shutdown_timeout
        self.received_signal: Optional[signal.Signals] = None
        self._main_task: Optional[Task[T]] = None
        self._active_loop: Optional[AbstractEventLoop] = None
        self._original_sigint: SignalHandlerType = None
        self._original_sigterm: SignalHandlerType = None
    
    def setup_signal_handlers(self) -> None:
        """Install SIGINT and SIGTERM handlers. Must be called from the main thread."""
        self._original_sigint = signal.getsignal(signal.SIGINT)
        self._original_sigterm = signal.getsignal(signal.SIGTERM)
        
        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)
    
    def restore_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        # SIG_DFL is 0, so compare against None
        if self._original_sigint is not None:
            signal.signal(signal.SIGINT, self._original_sigint)
        if self._original_sigterm is not None:
            signal.signal(signal.SIGTERM, self._original_sigterm)
        self._original_sigint = None
        self._original_sigterm = None
    
    def _handle_signal(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        """
        Handle termination signals by cancelling the main task.
        
        Args:
            sig_num: The signal number that was received
            frame: The current stack frame
        """
        self.received_signal = signal.Signals(sig_num)
        self.logger.log_warning(f"Received {self.received_signal.name}, stopping...")
        
        if self._main_task and not self._main_task.done() and self._active_loop:
            self._active_loop.call_soon_threadsafe(self._main_task.cancel)
    
    def register_handler(self, name: str, handler: Callable) -> None:
        """Register a shutdown handler.
        
        Args:
            name: Name of the handler, registering the same name again replaces it
            handler: Callable or coroutine function to execute during shutdown
        """
        self._handlers[name] = handler
    
    async def shutdown(self) -> None:
        """
        Execute all registered shutdown handlers in registration order.
        Only the first call has any effect.
        """
        if self._is_shutting_down:
            return
            
        self._is_shutting_down = True
        self.logger.log_info("Starting graceful shutdown...")
        
        tasks = []
        for name, handler in self._handlers.items():
            try:
                self.logger.log_info(f"Executing shutdown handler: {name}")
                if asyncio.iscoroutinefunction(handler):
                    tasks.append(asyncio.create_task(handler()))
                else:
                    result = handler()
                    if asyncio.iscoroutine(result):
                        tasks.append(asyncio.create_task(result))
            except Exception as e:
                self.logger.log_error(f"Error in shutdown handler {name}: {str(e)}")
        
        if tasks:
            try:
                await asyncio.wait_for(
                    asyncio.gather(*tasks, return_exceptions=True),
                    timeout=self.shutdown_timeout
                )
            except asyncio.TimeoutError:
                self.logger.log_warning(
                    f"Shutdown timed out after {self.shutdown_timeout} seconds. "
                    "Some handlers may not have completed gracefully."
                )
        
        self.logger.log_info("Graceful shutdown completed")
    
    def run_async_with_signals(self, coroutine: Coroutine[Any, Any, T]) -> Optional[T]:
        """
        Run a coroutine on a new event loop with signal handling.
        
        On SIGINT or SIGTERM the coroutine is cancelled and the shutdown
        handlers run. Handlers also run when the coroutine raises.
        
        Args:
            coroutine: The coroutine to execute
            
        Returns:
            The result of the coroutine, or None if it was stopped by a signal
            
        Raises:
            Any exception raised by the coroutine
        """
        result: Optional[T] = None
        
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._active_loop = loop
        
        self.setup_signal_handlers()
        
        try:
            main_task = loop.create_task(coroutine)
            self._main_task = cast(Task[T], main_task)
            
            try:
                result = loop.run_until_complete(main_task)
            except asyncio.CancelledError:
                self.logger.log_info("Task was cancelled, performing graceful shutdown")
                loop.run_until_complete(self.shutdown())
            
        except Exception as e:
            self.logger.log_error(f"Error during execution: {str(e)}")
            
            try:
                loop.run_until_complete(self.shutdown())
            except Exception as cleanup_err:
                self.logger.log_error(f"Error during cleanup: {str(cleanup_err)}")
            
            raise
            
        finally:
            self._main_task = None
            self._active_loop = None
            
            self.restore_signal_handlers()
            
            try:
                pending = asyncio.all_tasks(loop)
                if pending:
                    loop.run_until_complete(
                        asyncio.gather(*pending, return_exceptions=True)
                    )
            except Exception as e:
                self.logger.log_warning(f"Error cleaning up pending tasks: {str(e)}")
                
            try:
                loop.run_until_complete(loop.shutdown_asyncgens())
                loop.close()
            except Exception as e:
                self.logger.log_warning(f"Error closing event loop: {str(e)}")
            asyncio.set_event_loop(None)
            
        return result
