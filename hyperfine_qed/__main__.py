"""Command-line interface for hyperfine dipole-dipole coupling calculations."""

import argparse
import json
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

from .core.physics import CollectiveCouplingCalculator
from .config import ConfigManager, get_default_config
from .visualization.plotting import plot_sphere_samples, plot_coupling_vs_distance


def main():
    # Set up argument parser
    parser = argparse.ArgumentParser(description='Hyperfine Atom Coupling Tool')

    # Input/output arguments
    parser.add_argument('-c', '--config', type=str, help='Path to configuration file')
    parser.add_argument('-o', '--output', type=str, default='results',
                       help='Output directory for results')

    # Run options
    parser.add_argument('--plot', action='store_true', help='Generate plots')
    parser.add_argument('--save', action='store_true', help='Save results to file')
    parser.add_argument('--seed', type=int, default=None,
                       help='Override the sampling seed')

    args = parser.parse_args()

    # Load configuration
    if args.config:
        config = ConfigManager.load_config(args.config)
    else:
        print("Using default configuration")
        config = get_default_config()
    if args.seed is not None:
        config.setdefault('sampling', {})['seed'] = args.seed

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        params = ConfigManager.from_dict(config)
        atom, pair = params['atom'], params['pair']
        calculator = CollectiveCouplingCalculator(atom, pair)

        print(f"Atom with F levels {list(atom.F_levels)}, "
              f"transition {atom.upper} -> {atom.lower}, dimension {atom.dimension}")
        print(f"Separation: {pair.separation:.4f} (kr = {atom.wavenumber * pair.separation:.4f})")

        result = calculator.analyze()
        rates = result.metadata['collective_rates']
        print(f"Collective decay rates: {np.array2string(rates, precision=4)}")
        print(f"Largest exchange coupling |Ω|: {result.metadata['max_exchange']:.4f}")

        H = calculator.hamiltonian()
        jumps = calculator.jump_operators()
        print(f"Built Hamiltonian of shape {H.shape} and {len(jumps)} collective jump operators")

        sampling = params['sampling']
        directions = sampling.sample_directions()
        print(f"Sampled {len(directions)} directions ({sampling.method})")

        scan = params['scan']
        lo, hi = scan.get('distance_range', (0.05, 2.0))
        distances = np.linspace(lo, hi, scan.get('num_points', 400))
        scan_result = calculator.coupling_vs_distance(
            distances,
            direction=scan.get('direction', (0.0, 0.0, 1.0)),
            q=scan.get('polarization', 0),
        )

        # Save results if requested
        if args.save:
            result_file = output_dir / 'coupling_results.json'
            with open(result_file, 'w') as f:
                json.dump({
                    'coupling': result.to_dict(),
                    'scan': scan_result.to_dict(),
                    'directions': directions.tolist(),
                    'config': ConfigManager.to_dict(params),
                }, f, indent=2)
            print(f"Results saved to {result_file}")

        # Generate plots if requested
        if args.plot:
            print("Generating plots...")

            plots_dir = output_dir / 'plots'
            plots_dir.mkdir(exist_ok=True)

            fig, _ = plot_sphere_samples(*directions.T)
            fig.savefig(plots_dir / 'sampled_directions.png', dpi=300, bbox_inches='tight')

            fig, _ = plot_coupling_vs_distance(scan_result)
            fig.savefig(plots_dir / 'coupling_vs_distance.png', dpi=300, bbox_inches='tight')

            plt.close('all')
            print(f"Plots saved to {plots_dir}")

        print("Calculation completed successfully!")

    except Exception as e:
        print(f"Error during calculation: {str(e)}")
        raise

if __name__ == "__main__":
    main()
