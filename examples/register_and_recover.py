"""
Register and Recover Example

Registers a secret vibe, then tries to recover it with a rephrased vibe and
with an unrelated one. Uses the template generator, so no API key is needed.

Run `python examples/register_and_recover.py` from the repository root.
"""

from sonic_guardian import Guardian, commit, generate_blinding, verify


SECRET_VIBE = "A slow, muffled industrial bassline"
CANDIDATES = [
    "A fast, bright techno beat",
    "dark and muffled bass, slowed down",
]


def main() -> None:
    guardian = Guardian()

    # Only the hash and salt are stored; the vibe stays with the user.
    registration = guardian.register(SECRET_VIBE)
    stored_hash = registration.dna.hash
    salt = registration.dna.salt

    results = guardian.recover_any(CANDIDATES, stored_hash, salt)
    recovered = [r.vibe for r in results if r.matched]
    print(f"Recovered by: {recovered or 'nobody'}")

    # Bind the hash into a commitment and open it again.
    blinding = generate_blinding()
    commitment = commit(stored_hash, blinding)
    print(f"Commitment: {commitment}")
    print(f"Opens: {verify(stored_hash, blinding, commitment)}")


if __name__ == "__main__":
    main()
