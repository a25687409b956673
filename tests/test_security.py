"""
Tests for encryption, voters and authorization checkers.
"""

import threading

import pytest

from gears import Config
from gears.errors import DecryptionError, InvalidArgumentError
from gears.security import (
    ACCESS_ABSTAIN, ACCESS_DENIED, ACCESS_GRANTED, STRATEGY_CONSENSUS, STRATEGY_UNANIMOUS,
    AccessDecisionManager, AuthorizationChecker, ClassScopeAuthorizationChecker, Crypto,
    FieldVote, ObjectIdentity, RoleVoter, SuperUserRoleVoter, Token, TokenStorage, Voter,
)


class FixedVoter(Voter):
    def __init__(self, result):
        self.result = result

    def vote(self, token, subject, attributes):
        return self.result


class RecordingVoter(Voter):
    def __init__(self):
        self.subjects = []

    def vote(self, token, subject, attributes):
        self.subjects.append((list(attributes), subject))
        return ACCESS_GRANTED


@pytest.fixture
def admin():
    return Token(user='ann', role_names=['ROLE_ADMIN'])


class TestCrypto:
    """Test the crypto service."""

    def test_from_config(self):
        crypto = Crypto.from_config(Config(secret='s3cr3t'))
        assert crypto.decrypt(crypto.encrypt('order:42')) == 'order:42'

    def test_requires_secret(self):
        with pytest.raises(InvalidArgumentError):
            Crypto('')

    def test_other_secret_fails(self):
        encrypted = Crypto('one').encrypt('order:42')
        with pytest.raises(DecryptionError):
            Crypto('two').decrypt(encrypted)


class TestToken:
    """Test tokens and their storage."""

    def test_token(self, admin):
        assert admin.is_authenticated()
        assert not Token().is_authenticated()
        assert admin.get_role_names() == ['ROLE_ADMIN']

    def test_storage_is_thread_local(self, admin):
        storage = TokenStorage()
        storage.set_token(admin)
        seen = []

        thread = threading.Thread(target=lambda: seen.append(storage.get_token()))
        thread.start()
        thread.join()

        assert storage.get_token() is admin
        assert seen == [None]


class TestVoters:
    """Test the role voters."""

    def test_role_voter(self, admin):
        voter = RoleVoter()

        assert voter.vote(admin, None, ['ROLE_ADMIN']) == ACCESS_GRANTED
        assert voter.vote(admin, None, ['ROLE_USER']) == ACCESS_DENIED
        assert voter.vote(admin, None, ['VIEW']) == ACCESS_ABSTAIN

    def test_super_user_voter(self, admin):
        voter = SuperUserRoleVoter()
        root = Token(user='root', role_names=[SuperUserRoleVoter.ROLE_SUPER_USER])

        assert voter.vote(root, None, ['ANYTHING']) == ACCESS_GRANTED
        assert voter.vote(admin, None, ['ANYTHING']) == ACCESS_ABSTAIN
        assert voter.has_super_user_role(root)


class TestAccessDecisionManager:
    """Test the decision strategies."""

    @pytest.mark.parametrize("votes,expected", [
        ([ACCESS_DENIED, ACCESS_GRANTED], True),
        ([ACCESS_DENIED, ACCESS_ABSTAIN], False),
        ([ACCESS_ABSTAIN], False),
    ])
    def test_affirmative(self, votes, expected):
        manager = AccessDecisionManager([FixedVoter(vote) for vote in votes])
        assert manager.decide(Token(), ['X']) is expected

    @pytest.mark.parametrize("votes,expected", [
        ([ACCESS_GRANTED, ACCESS_GRANTED, ACCESS_DENIED], True),
        ([ACCESS_GRANTED, ACCESS_DENIED, ACCESS_DENIED], False),
        ([ACCESS_GRANTED, ACCESS_DENIED], True),
    ])
    def test_consensus(self, votes, expected):
        manager = AccessDecisionManager([FixedVoter(vote) for vote in votes], STRATEGY_CONSENSUS)
        assert manager.decide(Token(), ['X']) is expected

    def test_consensus_tie_can_deny(self):
        manager = AccessDecisionManager(
            [FixedVoter(ACCESS_GRANTED), FixedVoter(ACCESS_DENIED)],
            STRATEGY_CONSENSUS,
            allow_if_equal_granted_denied=False,
        )
        assert manager.decide(Token(), ['X']) is False

    @pytest.mark.parametrize("votes,expected", [
        ([ACCESS_GRANTED, ACCESS_ABSTAIN], True),
        ([ACCESS_GRANTED, ACCESS_DENIED], False),
    ])
    def test_unanimous(self, votes, expected):
        manager = AccessDecisionManager([FixedVoter(vote) for vote in votes], STRATEGY_UNANIMOUS)
        assert manager.decide(Token(), ['X']) is expected

    def test_all_abstain(self):
        manager = AccessDecisionManager([FixedVoter(ACCESS_ABSTAIN)], allow_if_all_abstain=True)
        assert manager.decide(Token(), ['X']) is True

    def test_invalid_strategy(self):
        with pytest.raises(InvalidArgumentError):
            AccessDecisionManager([], 'majority')


class TestAuthorizationChecker:
    """Test checking attributes for the current token."""

    def test_is_granted(self, admin):
        checker = AuthorizationChecker(TokenStorage(admin), AccessDecisionManager([RoleVoter()]))

        assert checker.is_granted('ROLE_ADMIN')
        assert not checker.is_granted('ROLE_USER')

    def test_anonymous(self):
        checker = AuthorizationChecker(TokenStorage(), AccessDecisionManager([RoleVoter()]))
        assert not checker.is_granted('ROLE_ADMIN')

    def test_class_scope(self, admin):
        voter = RecordingVoter()
        checker = ClassScopeAuthorizationChecker(
            AuthorizationChecker(TokenStorage(admin), AccessDecisionManager([voter]))
        )

        assert checker.has_access_to_type('VIEW', 'app.Order')
        assert checker.has_access_to_type_field('EDIT', 'app.Order', 'status')
        assert checker.has_access_to_object('DELETE', 'app.Order', 42)

        class_identity = ObjectIdentity('class', 'app.Order')
        assert voter.subjects == [
            (['VIEW'], class_identity),
            (['EDIT'], FieldVote(class_identity, 'status')),
            (['DELETE'], ObjectIdentity('42', 'app.Order')),
        ]
