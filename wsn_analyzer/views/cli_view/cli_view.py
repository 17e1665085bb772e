from wsn_analyzer.managers.view.view_strategy import ViewStrategy
from wsn_analyzer.models.exceptions import AnalyzerError, UnsupportedFileTypeError, InvalidInputDataError
from wsn_analyzer.models.dfs_trace import PSEUDOCODE
from wsn_analyzer.utils.logger.logger import Logger
import os
import platform
import shlex
from typing import List


class CommandLineView(ViewStrategy):
    """Command-line interface for the WSN analyzer."""

    name = "cli"

    def __init__(self, controller):
        super().__init__(controller)
        self.command_history = []
        self.max_history = 50

        # Command catalog
        self.commands = {
            'help': {
                'description': 'Show available commands and their usage',
                'usage': 'help [command]',
                'args': 'optional',
                'examples': ['help', 'help load']
            },
            'exit': {
                'description': 'Exit the CLI',
                'usage': 'exit',
                'args': 'none',
                'examples': ['exit']
            },
            'quit': {
                'description': 'Exit the CLI',
                'usage': 'quit',
                'args': 'none',
                'examples': ['quit']
            },
            'clear': {
                'description': 'Clear the terminal screen',
                'usage': 'clear',
                'args': 'none',
                'examples': ['clear']
            },
            'status': {
                'description': 'Show session status and network summary',
                'usage': 'status',
                'args': 'none',
                'examples': ['status']
            },
            'history': {
                'description': 'Show command history',
                'usage': 'history [number]',
                'args': 'optional',
                'examples': ['history', 'history 10']
            },
            'load': {
                'description': 'Load a graph file (.json, .txt, .csv, .edges, .xlsx)',
                'usage': 'load <file_path>',
                'args': 'required',
                'examples': ['load graphs/bridge.json', 'load graphs/ring.txt']
            },
            'demo': {
                'description': 'Load the 8-sensor demo deployment',
                'usage': 'demo',
                'args': 'none',
                'examples': ['demo']
            },
            'next': {
                'description': 'Advance the DFS trace by one step',
                'usage': 'next',
                'args': 'none',
                'examples': ['next']
            },
            'prev': {
                'description': 'Go back one DFS step',
                'usage': 'prev',
                'args': 'none',
                'examples': ['prev']
            },
            'play': {
                'description': 'Start or stop automatic stepping (driven by advance/tick)',
                'usage': 'play',
                'args': 'none',
                'examples': ['play']
            },
            'step_info': {
                'description': 'Show the current step and its pseudocode line',
                'usage': 'step_info',
                'args': 'none',
                'examples': ['step_info']
            },
            'table': {
                'description': 'Show disc/low/parent for every visited node at the current step',
                'usage': 'table',
                'args': 'none',
                'examples': ['table']
            },
            'nodes': {
                'description': 'List sensors with status and energy, or show one sensor in detail',
                'usage': 'nodes [node_id]',
                'args': 'optional',
                'examples': ['nodes', 'nodes 3']
            },
            'simulate': {
                'description': 'Start or stop the energy simulation',
                'usage': 'simulate',
                'args': 'none',
                'examples': ['simulate']
            },
            'tick': {
                'description': 'Advance the clock by n simulation intervals',
                'usage': 'tick [n]',
                'args': 'optional',
                'examples': ['tick', 'tick 5']
            },
            'advance': {
                'description': 'Advance the clock by a number of milliseconds',
                'usage': 'advance <ms>',
                'args': 'required',
                'examples': ['advance 1500']
            },
            'reinforce': {
                'description': 'Add chain links around the current articulation points',
                'usage': 'reinforce',
                'args': 'none',
                'examples': ['reinforce']
            },
            'reset': {
                'description': 'Stop all timers and reload the demo deployment',
                'usage': 'reset',
                'args': 'none',
                'examples': ['reset']
            },
            'export': {
                'description': 'Export the trace and network',
                'usage': 'export <strategy> <folder_path>',
                'args': 'required',
                'examples': ['export csv_trace_export_strategy ./exports', 'export json_trace_export_strategy ./exports']
            },
            'configure_logger': {
                'description': 'Configure logging settings',
                'usage': 'configure_logger <enable|disable|level> [file_location|priority]',
                'args': 'required',
                'examples': ['configure_logger enable', 'configure_logger disable', 'configure_logger enable ./logs.txt', 'configure_logger level info']
            },
        }

    def clear_view(self):
        """Clear the terminal screen."""
        Logger.log("start clear_view()")
        if platform.system() == 'Windows':
            os.system('cls')
        else:
            os.system('clear')
        Logger.log("end clear_view()")

    def start_view(self):
        """Start the CLI."""
        Logger.log("start start_view()")
        self.running = True
        self.clear_view()
        self._print_welcome()
        self.run()
        Logger.log("end start_view()")

    def stop_view(self):
        """Stop the CLI."""
        Logger.log("start stop_view()")
        self.running = False
        print("\n>>> WSN Analyzer CLI stopped. Goodbye!\n")
        Logger.log("end stop_view()")

    def _print_welcome(self):
        print("=" * 60)
        print("        WSN ARTICULATION POINT ANALYZER")
        print("=" * 60)
        print("Step-by-step cut-vertex search and self-healing simulation")
        print("Type 'help' to see available commands")
        print("Type 'exit' or 'quit' to exit")
        print("=" * 60)

    def run(self):
        """Main command loop."""
        Logger.log("start run()")
        while self.running:
            try:
                command = input("\nWSN> ").strip()
                if not command:
                    continue
                self._add_to_history(command)
                self._process_command(command)
            except KeyboardInterrupt:
                print("\n>>> Use 'exit' or 'quit' to exit the application.")
            except EOFError:
                print("\n>>> End of input. Exiting...")
                self.stop_view()
                break
        Logger.log("end run()")

    def _add_to_history(self, command: str):
        """Track command history."""
        if command not in self.command_history:
            self.command_history.append(command)
            if len(self.command_history) > self.max_history:
                self.command_history.pop(0)

    def _process_command(self, command: str):
        """Parse and dispatch a command."""
        try:
            parts = shlex.split(command)
            if not parts:
                return
            cmd = parts[0].lower()
            args = parts[1:]
            Logger.log(f"Processing command: {cmd} with args: {args}")
            self._execute_command(cmd, args)
        except AnalyzerError as ex:
            print(f">>> Error: {ex}")
        except Exception as ex:
            print(f">>> Error processing command: {ex}")
            Logger.log(f"Error processing command '{command}': {ex}", Logger.LogPriority.ERROR)

    def _execute_command(self, cmd: str, args: List[str]):
        """Execute a command."""
        if cmd in ['exit', 'quit']:
            self.stop_view()
            return
        handlers = {
            'clear': lambda: (self.clear_view(), self._print_welcome()),
            'help': lambda: self._handle_help(args),
            'status': self._handle_status,
            'history': lambda: self._handle_history(args),
            'load': lambda: self._handle_load(args),
            'demo': self._handle_demo,
            'next': self._handle_next,
            'prev': self._handle_prev,
            'play': self._handle_play,
            'step_info': self._handle_step_info,
            'table': self._handle_table,
            'nodes': lambda: self._handle_nodes(args),
            'simulate': self._handle_simulate,
            'tick': lambda: self._handle_tick(args),
            'advance': lambda: self._handle_advance(args),
            'reinforce': self._handle_reinforce,
            'reset': self._handle_reset,
            'export': lambda: self._handle_export(args),
            'configure_logger': lambda: self._handle_configure_logger(args),
        }
        handler = handlers.get(cmd)
        if handler is None:
            print(f">>> Unknown command: '{cmd}'")
            print(">>> Type 'help' to see available commands")
            return
        handler()

    def _handle_help(self, args: List[str]):
        if not args:
            self._show_general_help()
        else:
            self._show_command_help(args[0])

    def _show_general_help(self):
        print("\n" + "=" * 60)
        print("                    WSN ANALYZER CLI HELP")
        print("=" * 60)
        print("Available commands:\n")
        for cmd, info in self.commands.items():
            print(f"  {cmd:<20} - {info['description']}")
        print("\nFor detailed help on a specific command, type: help <command>")
        print("=" * 60)

    def _show_command_help(self, command: str):
        if command not in self.commands:
            print(f">>> Unknown command: '{command}'")
            return
        info = self.commands[command]
        print(f"\nCommand: {command}")
        print(f"Description: {info['description']}")
        print(f"Usage: {info['usage']}")
        print(f"Arguments: {info['args']}")
        print("Examples:")
        for example in info['examples']:
            print(f"  {example}")

    def _handle_status(self):
        status = self.controller.status()
        print("\n" + "=" * 40)
        print("           SYSTEM STATUS")
        print("=" * 40)
        print(f"Network Loaded: {'Yes' if status['network_loaded'] else 'No'}")
        if status['network_loaded']:
            print(f"Source: {status['source']}")
            print(f"Nodes: {status['nodes']} (active {status['active_nodes']}, "
                  f"sleeping {status['sleeping_nodes']}, dead {status['dead_nodes']})")
            print(f"Links: {status['links']}")
            print(f"Trace: step {status['current_step']} of {status['steps'] - 1}")
            print(f"Articulation Points: {status['articulation_points'] or 'none'}")
            print(f"Playing: {'Yes' if status['is_playing'] else 'No'}")
            print(f"Simulating: {'Yes' if status['is_simulating'] else 'No'}")
            print(f"Reinforced: {'Yes' if status['is_reinforced'] else 'No'}")
        print(f"Clock: {status['clock_ms']} ms")
        print("=" * 40)

    def _handle_history(self, args: List[str]):
        try:
            if args:
                num = int(args[0])
                if num <= 0:
                    print(">>> Number must be positive")
                    return
                history = self.command_history[-num:]
            else:
                history = self.command_history[-10:]
            if not history:
                print(">>> No command history available")
                return
            print("\nCommand History:")
            for i, cmd in enumerate(history, 1):
                print(f"  {i:2d}. {cmd}")
        except ValueError:
            print(">>> Invalid number format")

    def _handle_load(self, args: List[str]):
        if not args:
            print(">>> Error: File path required")
            print(">>> Usage: load <file_path>")
            return
        file_path = args[0]
        try:
            self.controller.input_network(file_path)
            status = self.controller.status()
            print(f">>> Graph loaded from: {file_path}")
            print(f">>> {status['nodes']} nodes, {status['links']} links, {status['steps']} trace steps")
        except FileNotFoundError:
            print(f">>> Error: File not found: {file_path}")
        except UnsupportedFileTypeError as ex:
            print(f">>> Error: {ex}")
        except InvalidInputDataError as ex:
            print(f">>> Error: Invalid input data - {ex}")

    def _handle_demo(self):
        self.controller.load_default_scenario()
        print(">>> Demo deployment loaded")
        self._print_step(self.controller.current_step())

    def _handle_next(self):
        if not self.controller.next_step():
            print(">>> Already at the last step")
        self._print_step(self.controller.current_step())

    def _handle_prev(self):
        if not self.controller.prev_step():
            print(">>> Already at the first step")
        self._print_step(self.controller.current_step())

    def _handle_play(self):
        playing = self.controller.toggle_playback()
        if playing:
            print(f">>> Playback started ({self.controller.config.timing.playback_interval_ms} ms per step); use 'advance' to move the clock")
        else:
            print(">>> Playback stopped")

    def _handle_step_info(self):
        step = self.controller.current_step()
        if step is None:
            print(">>> No trace loaded")
            return
        self._print_step(step)
        print()
        for line_number, line in enumerate(PSEUDOCODE, start=1):
            marker = "->" if line_number == step.code_line else "  "
            print(f"  {marker} {line_number:2d} {line}")

    def _handle_table(self):
        step = self.controller.current_step()
        if step is None:
            print(">>> No trace loaded")
            return
        state = step.state
        print(f"\n  {'node':>6} {'disc':>6} {'low':>6} {'parent':>8}  color")
        for node_id in sorted(state.colors):
            disc = state.discovery_time.get(node_id, "-")
            low = state.low_link.get(node_id, "-")
            parent = state.parents.get(node_id, "-")
            parent = "root" if parent is None else parent
            print(f"  {node_id:>6} {disc:>6} {low:>6} {parent:>8}  {state.colors[node_id].value}")

    def _handle_nodes(self, args: List[str]):
        if not self.controller.nodes:
            print(">>> No network loaded")
            return
        if args:
            try:
                node_id = int(args[0])
            except ValueError:
                print(">>> Error: node id must be a number")
                return
            info = self.controller.node_info(node_id)
            print(f"\nNode {info['n_id']} ({info['status']})")
            print(f"  position: ({info['x']:.1f}, {info['y']:.1f})")
            low = "  LOW BATTERY" if info['low_battery'] else ""
            print(f"  energy: {info['energy']:.1f} / {info['max_energy']:.1f} ({info['energy_ratio']:.0%}){low}")
            print(f"  range: {info['sensing_range']:.1f}")
            print(f"  neighbors: {info['neighbors'] or 'none'}")
            print(f"  articulation point at current step: {'Yes' if info['is_articulation_point'] else 'No'}")
            print(f"  critical in simulation: {'Yes' if info['is_critical'] else 'No'}")
            return
        print(f"\n  {'node':>6} {'x':>8} {'y':>8} {'energy':>8}  status")
        for node in self.controller.nodes:
            marker = "  LOW BATTERY" if self.controller.is_low_battery(node) else ""
            print(f"  {node.n_id:>6} {node.x:>8.1f} {node.y:>8.1f} {node.energy:>8.1f}  {node.status.value}{marker}")

    def _handle_simulate(self):
        simulating = self.controller.toggle_simulation()
        if simulating:
            critical = sorted(self.controller.simulation_manager.critical_ids)
            print(f">>> Simulation started; critical nodes: {critical or 'none'}")
        else:
            print(">>> Simulation stopped")

    def _handle_tick(self, args: List[str]):
        try:
            count = int(args[0]) if args else 1
        except ValueError:
            print(">>> Error: tick count must be a number")
            return
        if count <= 0:
            print(">>> Number must be positive")
            return
        fired = self.controller.advance_time(count * self.controller.config.timing.simulation_interval_ms)
        print(f">>> Clock advanced, {fired} callbacks ran")

    def _handle_advance(self, args: List[str]):
        if not args:
            print(">>> Usage: advance <ms>")
            return
        try:
            ms = int(args[0])
            fired = self.controller.advance_time(ms)
            print(f">>> Clock advanced {ms} ms, {fired} callbacks ran")
        except ValueError as ex:
            print(f">>> Error: {ex}")

    def _handle_reinforce(self):
        new_links = self.controller.reinforce_network()
        if not new_links:
            print(">>> Nothing to reinforce at this step")
            return
        pairs = ", ".join(f"{link.source}-{link.target}" for link in new_links)
        print(f">>> Added {len(new_links)} reinforcement links: {pairs}")

    def _handle_reset(self):
        self.controller.reset()
        print(">>> Timers cancelled and demo deployment reloaded")

    def _handle_export(self, args: List[str]):
        if len(args) != 2:
            print(">>> Error: Two arguments required")
            print(">>> Usage: export <strategy> <folder_path>")
            return
        strategy, folder_path = args
        try:
            folder = self.controller.export_trace(f"export_request {strategy} {folder_path}")
            print(f">>> Export completed successfully to: {folder}")
        except ValueError as ex:
            print(f">>> Error during export: {ex}")

    def _handle_configure_logger(self, args: List[str]):
        if not args:
            print(">>> Error: Logger state required")
            print(">>> Usage: configure_logger <enable|disable|level> [file_location|priority]")
            return
        state = args[0].lower()
        if state == 'level':
            if len(args) != 2:
                print(">>> Usage: configure_logger level <debug|info|warning|error|critical>")
                return
            self.controller.configure_logger(True, min_priority=args[1])
            print(f">>> Logging entries at {args[1].lower()} and above")
            return
        if state not in ['enable', 'disable']:
            print(">>> Error: Logger state must be 'enable', 'disable' or 'level'")
            return
        enabled = state == 'enable'
        kwargs = {}
        if len(args) > 1 and enabled:
            kwargs['storage_strategy'] = 'file'
            kwargs['file_location'] = args[1]
        self.controller.configure_logger(enabled, **kwargs)
        print(f">>> Logger {state}d successfully")

    def _print_step(self, step):
        if step is None:
            print(">>> No trace loaded")
            return
        total = len(self.controller.playback_manager.steps)
        print(f">>> [{step.step_id + 1}/{total}] ({step.event.value}) {step.description}")
        if step.state.articulation_points:
            print(f">>> Articulation points so far: {sorted(step.state.articulation_points)}")
