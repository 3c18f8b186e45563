"""
Command-line interface for tiny-huckel.

Usage:
    tiny-huckel calc benzene
    tiny-huckel calc pyridine --report diagram
    tiny-huckel calc molecule.json --charge -1 --params overrides.json --json
    tiny-huckel presets
    tiny-huckel serve --port 8890
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from ..core.errors import HuckelError


def _load_structure(target):
    """A preset name or a path to a structure JSON file."""
    from ..core.structure import Structure
    from ..molecules import MoleculeLibrary

    path = Path(target)
    if target.endswith(".json") or path.is_file():
        with path.open("r", encoding="utf-8") as fh:
            return Structure.from_dict(json.load(fh))
    return MoleculeLibrary.get(target)


def cmd_calc(args):
    """Run a Hückel calculation and print a report."""
    from ..core import DEFAULT_PARAMETERS, HuckelCalculator, load_parameters
    from ..visualization import render

    structure = _load_structure(args.target)
    parameters = load_parameters(args.params) if args.params else DEFAULT_PARAMETERS
    calc = HuckelCalculator(structure, parameters=parameters, method=args.method)
    result = calc.calculate(args.charge)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        if structure.name:
            print(f"Molecule: {structure.name}\n")
        print(render(result, args.report))


def cmd_presets(args):
    """List the preset molecules."""
    from ..molecules import MoleculeLibrary

    print("Preset molecules:")
    for name, info in MoleculeLibrary.describe().items():
        charge = f", charge {info['charge']:+d}" if info["charge"] else ""
        print(f"  {name:<18s} {info['pi_atoms']:2d} π atoms{charge:<12s} {info['description']}")


def cmd_params(args):
    """Print the parameter table (defaults merged with an override file)."""
    from ..core import DEFAULT_PARAMETERS, load_parameters

    parameters = load_parameters(args.params) if args.params else DEFAULT_PARAMETERS
    print(json.dumps(parameters.to_dict(), indent=2))


def cmd_serve(args):
    """Serve the JSON API."""
    from ..dashboard import launch

    launch(port=args.port, host=args.host, debug=args.debug)


def cmd_info(args):
    """Show tiny-huckel information."""
    from .. import __version__

    print(f"""
tiny-huckel v{__version__}
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Simple Hückel molecular orbital calculations for conjugated π systems.

Features:
  • Automatic π-system detection (C, N, O, S, P, halogens, B, Si)
  • Adaptive heteroatom parameters (pyridine vs pyrrole nitrogen)
  • LAPACK or pure-numpy Jacobi eigensolver
  • Energies, coefficients, charges, bond orders, HOMO/LUMO
  • JSON API server

Usage:
  tiny-huckel presets
  tiny-huckel calc benzene
  tiny-huckel calc pyrrole --report all
  tiny-huckel serve
""")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='tiny-huckel',
        description='Hückel MO calculations for conjugated π systems'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Calc command
    calc_parser = subparsers.add_parser('calc', help='Run a Hückel calculation')
    calc_parser.add_argument('target', help='Preset name or structure JSON file')
    calc_parser.add_argument('--charge', type=int, default=0, help='Net molecular charge')
    calc_parser.add_argument('--params', help='JSON file of hX/hXY overrides')
    calc_parser.add_argument('--method', choices=['lapack', 'jacobi'], default='lapack',
                             help='Eigensolver')
    calc_parser.add_argument('--report', default='energies',
                             choices=['energies', 'coefficients', 'matrices', 'diagram', 'all'],
                             help='Report to print')
    calc_parser.add_argument('--json', action='store_true', help='Print the full result as JSON')
    calc_parser.set_defaults(func=cmd_calc)

    # Presets command
    presets_parser = subparsers.add_parser('presets', help='List preset molecules')
    presets_parser.set_defaults(func=cmd_presets)

    # Params command
    params_parser = subparsers.add_parser('params', help='Show the parameter table')
    params_parser.add_argument('--params', help='JSON file of hX/hXY overrides')
    params_parser.set_defaults(func=cmd_params)

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Start the JSON API server')
    serve_parser.add_argument('--port', type=int, default=8890, help='Port')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Host address')
    serve_parser.add_argument('--debug', action='store_true', help='Flask debug mode')
    serve_parser.set_defaults(func=cmd_serve)

    # Info command
    info_parser = subparsers.add_parser('info', help='Show tiny-huckel info')
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.verbose:
        from ..logging_config import setup_logging
        setup_logging(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (HuckelError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
