"""Jsonnice Debug Adapter

Implements the Debug Adapter Protocol for editor integration.
"""

import json
import logging
import os
import socket
from typing import Any, BinaryIO, Dict, List, Optional

from .evaluator import EvaluationError, evaluate_expression, evaluate_snippet
from .input_reader import InputError, read_input


logger = logging.getLogger(__name__)

DAP_HOST = "localhost"
DAP_PORT = 54321

THREAD_ID = 1


class DebugAdapterError(Exception):
    """Exception for debug adapter errors."""
    pass


class JsonnetDebugAdapter:
    """Debug Adapter for jsonnet programs."""

    def __init__(self, input_stream: BinaryIO, output_stream: BinaryIO):
        """Initialize debug adapter.

        Args:
            input_stream: Binary stream the client writes requests to
            output_stream: Binary stream responses and events are written to
        """
        self.input_stream = input_stream
        self.output_stream = output_stream

        # State
        self.sequence = 0
        self.running = False

        # Launched program
        self.filename: Optional[str] = None
        self.source: Optional[str] = None
        self.jpath: List[str] = []

        # Request handlers
        self.request_handlers = {
            'initialize': self._handle_initialize,
            'launch': self._handle_launch,
            'attach': self._handle_attach,
            'configurationDone': self._handle_configuration_done,
            'threads': self._handle_threads,
            'setBreakpoints': self._handle_set_breakpoints,
            'setExceptionBreakpoints': self._handle_set_exception_breakpoints,
            'evaluate': self._handle_evaluate,
            'disconnect': self._handle_disconnect,
        }

    def run(self) -> None:
        """Serve requests until disconnect or end of input."""
        self.running = True

        while self.running:
            try:
                message = self._read_message()
            except DebugAdapterError as e:
                logger.error("closing session: %s", e)
                break
            if message is None:
                logger.debug("client closed the input stream")
                break
            self._handle_message(message)

        self.running = False

    def _read_message(self) -> Optional[Dict[str, Any]]:
        """Read one framed message from the input stream.

        Returns:
            The decoded message, or None at end of input
        """
        length = None
        while True:
            line = self.input_stream.readline()
            if not line:
                return None

            line = line.strip()
            if not line:
                if length is None:
                    continue
                break

            name, _, value = line.decode('ascii', 'replace').partition(':')
            if name.strip().lower() == 'content-length':
                try:
                    length = int(value.strip())
                except ValueError:
                    raise DebugAdapterError(f"Invalid Content-Length header: {value.strip()}")
                if length < 0:
                    raise DebugAdapterError(f"Invalid Content-Length header: {length}")

        content = self.input_stream.read(length)
        if len(content) < length:
            return None

        try:
            message = json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("discarding malformed message: %s", e)
            return {}

        return message if isinstance(message, dict) else {}

    def _send_message(self, message: Dict[str, Any]) -> None:
        """Send a message to the output stream."""
        content = json.dumps(message).encode('utf-8')
        header = f"Content-Length: {len(content)}\r\n\r\n".encode('ascii')

        self.output_stream.write(header + content)
        self.output_stream.flush()

    def _send_response(self, request_seq: int, command: str, success: bool = True,
                       message: str = None, body: Dict[str, Any] = None) -> None:
        """Send a response message."""
        self.sequence += 1

        response = {
            'type': 'response',
            'seq': self.sequence,
            'request_seq': request_seq,
            'success': success,
            'command': command
        }

        if message:
            response['message'] = message

        if body:
            response['body'] = body

        self._send_message(response)

    def _send_event(self, event: str, body: Dict[str, Any] = None) -> None:
        """Send an event message."""
        self.sequence += 1

        event_msg = {
            'type': 'event',
            'seq': self.sequence,
            'event': event
        }

        if body:
            event_msg['body'] = body

        self._send_message(event_msg)

    def _send_error_response(self, request_seq: int, command: str, error_message: str) -> None:
        """Send an error response."""
        self._send_response(request_seq, command, False, error_message)

    def _handle_message(self, message: Dict[str, Any]) -> None:
        """Handle incoming message."""
        if message.get('type') == 'request':
            self._handle_request(message)
        else:
            logger.debug("ignoring %s message", message.get('type'))

    def _handle_request(self, message: Dict[str, Any]) -> None:
        """Handle a request message."""
        command = message.get('command', '')
        seq = message.get('seq', 0)
        arguments = message.get('arguments') or {}

        logger.debug("request %s: %s", seq, command)

        handler = self.request_handlers.get(command) if isinstance(command, str) else None
        if handler is None:
            self._send_error_response(seq, command, f"Unknown command: {command}")
            return

        if not isinstance(arguments, dict):
            self._send_error_response(seq, command, "Request arguments must be an object")
            return

        try:
            handler(seq, arguments)
        except (DebugAdapterError, InputError, EvaluationError) as e:
            self._send_error_response(seq, command, str(e))
        except (TypeError, AttributeError, ValueError) as e:
            logger.warning("malformed %s request: %s", command, e)
            self._send_error_response(seq, command, f"Malformed {command} request: {e}")

    # Request handlers

    def _handle_initialize(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle initialize request."""
        capabilities = {
            'supportsConfigurationDoneRequest': True,
            'supportsFunctionBreakpoints': False,
            'supportsConditionalBreakpoints': False,
            'supportsEvaluateForHovers': True,
            'exceptionBreakpointFilters': [],
            'supportsStepBack': False,
            'supportsSetVariable': False,
            'supportsRestartFrame': False,
            'supportsTerminateRequest': False,
        }

        self._send_response(seq, 'initialize', True, body=capabilities)
        self._send_event('initialized')

    def _handle_launch(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle launch request."""
        program = args.get('program')
        if not program:
            raise DebugAdapterError("No program specified")

        filename_is_code = bool(args.get('exec', False))
        filename, source = read_input(filename_is_code, program)

        jpath = [str(p) for p in args.get('jpath', [])]
        if not filename_is_code:
            jpath.append(os.path.dirname(filename) or '.')

        self.filename = filename
        self.source = source
        self.jpath = jpath
        logger.info("launched %s", filename)

        self._send_response(seq, 'launch', True)

    def _handle_attach(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle attach request."""
        self._send_error_response(seq, 'attach', "Attach not supported")

    def _handle_configuration_done(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle configurationDone request by evaluating the launched program."""
        self._send_response(seq, 'configurationDone', True)

        if self.source is None:
            return

        try:
            output = evaluate_snippet(self.filename, self.source, self.jpath)
            category, exit_code = 'stdout', 0
        except EvaluationError as e:
            output = f"{e}\n"
            category, exit_code = 'stderr', 1

        self._send_event('output', {'category': category, 'output': output})
        self._send_event('exited', {'exitCode': exit_code})
        self._send_event('terminated')

    def _handle_threads(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle threads request."""
        self._send_response(seq, 'threads', True, body={
            'threads': [{'id': THREAD_ID, 'name': 'main'}]
        })

    def _handle_set_breakpoints(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle setBreakpoints request."""
        breakpoints = [
            {
                'verified': False,
                'line': bp.get('line', 0),
                'message': "Breakpoints are not supported"
            }
            for bp in args.get('breakpoints', [])
        ]

        self._send_response(seq, 'setBreakpoints', True, body={
            'breakpoints': breakpoints
        })

    def _handle_set_exception_breakpoints(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle setExceptionBreakpoints request."""
        self._send_response(seq, 'setExceptionBreakpoints', True)

    def _handle_evaluate(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle evaluate request."""
        expression = args.get('expression', '')
        if not expression:
            raise DebugAdapterError("No expression specified")

        result = evaluate_expression(
            self.filename or '<evaluate>', self.source, expression, self.jpath
        )

        self._send_response(seq, 'evaluate', True, body={
            'result': result.rstrip('\n'),
            'variablesReference': 0
        })

    def _handle_disconnect(self, seq: int, args: Dict[str, Any]) -> None:
        """Handle disconnect request."""
        self._send_response(seq, 'disconnect', True)
        self.running = False


def start_debug_adapter(host: str = DAP_HOST, port: int = DAP_PORT,
                        max_sessions: Optional[int] = None) -> None:
    """Listen for DAP clients and serve them one at a time.

    Args:
        host: Interface to bind
        port: TCP port to bind
        max_sessions: Stop after this many sessions (default: serve forever)
    """
    sessions = 0
    with socket.create_server((host, port)) as server:
        logger.info("DAP server listening on %s:%d", host, port)
        try:
            while max_sessions is None or sessions < max_sessions:
                conn, address = server.accept()
                logger.info("client connected from %s", address[0])
                try:
                    with conn, conn.makefile('rb') as rfile, conn.makefile('wb') as wfile:
                        JsonnetDebugAdapter(rfile, wfile).run()
                    logger.info("client disconnected")
                except (OSError, DebugAdapterError) as e:
                    logger.error("session with %s ended: %s", address[0], e)
                sessions += 1
        except KeyboardInterrupt:
            logger.info("DAP server interrupted by user")
