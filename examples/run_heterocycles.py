"""Example: Compare five-membered heterocycles with benzene and pyridine."""
import sys
sys.path.insert(0, 'src')

from tiny_huckel import HuckelCalculator, MoleculeLibrary, render

print("=" * 50)
print("tiny-huckel: Aromatic Heterocycles")
print("=" * 50)

for name in ["benzene", "pyridine", "pyrrole", "furan", "thiophene"]:
    result = HuckelCalculator(MoleculeLibrary.get(name)).calculate()
    charges = ", ".join(f"{a.label}:{q:+.3f}" for a, q in zip(result.pi_atoms, result.atomic_charges))
    print(f"\n{name}")
    print(f"  E_π = {result.total_pi_electrons}α + {result.total_energy:.4f}β")
    print(f"  HOMO-LUMO gap: {result.homo_lumo_gap:.4f} |β|")
    print(f"  π charges: {charges}")

print("\nPyrrole level diagram:")
print(render(HuckelCalculator(MoleculeLibrary.get("pyrrole")).calculate(), "diagram"))
