import rollcall
from rollcall import Forbidden, NotFound


def main() -> None:
    server = rollcall.run(port=0, new_server=True)
    alice = server.client("alice")
    bob = server.client("bob")

    member = alice.register("alice", ["coding", "chess"], bio="hi")
    print("registered", member)

    member.update(nickname="alice2")
    print("profile", member.profile())

    try:
        bob.update_nickname(member.id, "x")
    except Forbidden as ex:
        print("bob was refused:", ex)

    try:
        bob.check_visibility(member.id, "bob")
    except NotFound:
        print("no grant recorded for bob yet")
    member.grant("bob")
    print("visible to bob:", member.visible_to("bob"))

    member.login()
    member.login()
    print("activity", member.activity())

    member.delete()
    print("remaining members:", server.registry.member_count())


if __name__ == "__main__":
    main()
