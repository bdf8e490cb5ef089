import os
import sys

from dotenv import load_dotenv
from eth_account import Account
from langchain_core.messages import HumanMessage
from langchain_core.tools import StructuredTool
from langchain_openai import ChatOpenAI
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from aave_agentkit import (
    Action,
    AgentKit,
    AgentKitConfig,
    EthAccountWalletProvider,
    EthAccountWalletProviderConfig,
    aave_action_provider,
    weth_action_provider,
)
from aave_agentkit.network import NETWORK_ID_TO_CHAIN_ID

# Load environment variables
load_dotenv()


def validate_environment():
    """Validate required environment variables are present."""
    required_vars = ["PRIVATE_KEY", "OPENAI_API_KEY"]

    missing_vars = [var for var in required_vars if not os.getenv(var)]

    if missing_vars:
        print(f"Error: Missing required environment variables: {', '.join(missing_vars)}")
        sys.exit(1)


def to_langchain_tool(action: Action) -> StructuredTool:
    """Wrap an AgentKit action as a LangChain tool."""

    def invoke_tool(**kwargs) -> str:
        return action.invoke(kwargs)

    return StructuredTool(
        name=action.name,
        description=action.description,
        args_schema=action.args_schema,
        func=invoke_tool,
    )


def initialize_agent():
    """Initialize the agent with the Aave and WETH action providers.

    Returns:
        tuple: The agent executor and its config.

    """
    network_id = os.getenv("NETWORK_ID", "base-sepolia")
    chain_id = NETWORK_ID_TO_CHAIN_ID.get(network_id)
    if chain_id is None:
        print(f"Error: Unsupported NETWORK_ID {network_id}")
        sys.exit(1)

    wallet_provider = EthAccountWalletProvider(
        EthAccountWalletProviderConfig(
            account=Account.from_key(os.getenv("PRIVATE_KEY")),
            chain_id=chain_id,
            rpc_url=os.getenv("RPC_URL"),  # Optional, defaults to the public endpoint
        )
    )

    agentkit = AgentKit(
        AgentKitConfig(
            wallet_provider=wallet_provider,
            action_providers=[
                aave_action_provider(),
                weth_action_provider(),
            ],
        )
    )

    tools = [to_langchain_tool(action) for action in agentkit.get_actions()]

    llm = ChatOpenAI(model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"))
    memory = MemorySaver()
    config = {"configurable": {"thread_id": "Aave WETH Chatbot"}}

    agent = create_react_agent(
        llm,
        tools=tools,
        checkpointer=memory,
        prompt=(
            "You are a helpful agent that manages a WETH position on Aave V3 with the tools "
            f"available to you. Your wallet address is {wallet_provider.get_address()} on "
            f"{network_id}. To supply WETH, first wrap ETH if needed, then approve the Aave "
            "Pool for at least the amount, then supply. Repaying also needs an approval. "
            "Check balances and the account health factor before borrowing or withdrawing. "
            "Report transaction hashes to the user. If a tool returns an error, explain it "
            "and do not retry blindly."
        ),
    )

    return agent, config


def run_chat_mode(agent, config):
    """Run the agent interactively based on user input."""
    print("Starting chat mode... Type 'exit' to end.")
    while True:
        try:
            user_input = input("\nPrompt: ")
            if user_input.lower() == "exit":
                break

            for chunk in agent.stream(
                {"messages": [HumanMessage(content=user_input)]}, config
            ):
                if "agent" in chunk:
                    print(chunk["agent"]["messages"][0].content)
                elif "tools" in chunk:
                    print(chunk["tools"]["messages"][0].content)
                print("-------------------")

        except KeyboardInterrupt:
            print("Goodbye Agent!")
            sys.exit(0)


def main():
    """Start the chatbot agent."""
    validate_environment()

    agent, config = initialize_agent()
    run_chat_mode(agent, config)


if __name__ == "__main__":
    print("Starting Agent...")
    main()
