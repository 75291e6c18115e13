import sys
import json
from edpem.crypto.keys import KeyPair
from edpem.crypto.errors import EdPemError
from edpem.utils.buffer_pool import BufferPool
from edpem.utils.logger import Logger


def load_config(config_file):
    """Load configuration from file"""
    with open(config_file, 'r', encoding='utf-8') as f:
        return json.load(f)


def run_demo(config):
    """Generate, sign, serialize and re-parse key pairs"""
    logger = Logger("edpem.demo", config.get("log_file"), config.get("log_level", "info"))
    pool = BufferPool(config.get("buffer_pool", {}))

    print("=" * 60)
    print("EDPEM DEMO")
    print("=" * 60)

    # Fresh key pair
    kp = KeyPair(pool)
    pub_pem, priv_pem = kp.to_pem_strings()
    print(f"\nGenerated key pair {kp.fingerprint()}")
    print(pub_pem)
    print(priv_pem)

    message = config.get("message", "hello").encode("utf-8")
    signature = kp.sign(message)
    ok = kp.verify(message, signature)
    print(f"Signature over {message!r}: {signature.hex()[:32]}...")
    print(f"  verify (own key):   {ok}")

    other = KeyPair(pool)
    print(f"  verify (other key): {other.verify(message, signature)}")

    # Round trip
    restored = KeyPair.from_pem(pub_pem, priv_pem, pool)
    round_trip = restored.public_key == kp.public_key and restored.private_key == kp.private_key
    print(f"  PEM round trip:     {round_trip}")

    # Fixed vectors
    vectors = config.get("vectors")
    if vectors:
        obj = KeyPair.from_pem(vectors["public_pem"], vectors["private_pem"], pool)
        pub_x, priv_x = obj.to_pem_strings()
        print(f"\nParsed vectors {obj.fingerprint()}")
        print(pub_x)
        print(priv_x)

    logger.log(f"Buffer pool: {pool.stats()}")

    success = ok and round_trip and pool.in_use == 0
    print("=" * 60)
    print("✓ DEMO SUCCESSFUL" if success else "✗ DEMO FAILED")
    print("=" * 60)
    return success


def main():
    """Main function"""
    if len(sys.argv) < 2:
        config_file = "config/demo_config.json"
        print(f"Using default config: {config_file}")
    else:
        config_file = sys.argv[1]

    try:
        config = load_config(config_file)
        success = run_demo(config)
        sys.exit(0 if success else 1)
    except (OSError, ValueError, EdPemError) as e:
        print(f"\nERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
