from instancectl import OvhConfig, run_operation



def main():
    # Example usage: start an existing instance. Credentials are read from
    # the OVH_* environment variables when not given explicitly.
    config = OvhConfig(
        endpoint="ovh-eu",
        service_name="0123456789abcdef0123456789abcdef",
        instance_name="builder",
    )

    outcome = run_operation("start", config)

    print(f"Outcome: {outcome.action.value} (issued={outcome.issued})")
    print(f"Detail: {outcome.detail}")

if __name__ == "__main__":
    main()
