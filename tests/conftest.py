import pytest

# Token bridge governance VAAs, byte for byte as the guardians signed them

REGISTER_CHAIN_VAA = bytes.fromhex(
    "01000000000100b072505b5b999c1d08905c02e2b6b2832ef72c0ba6c8db4f77"
    "fe457ef2b3d053410b1e92a9194d9210df24d987ac83d7b6f0c21ce90f8bc186"
    "9de0898bda7e9801000000010000000100010000000000000000000000000000"
    "00000000000000000000000000000000000400000000013c1bfa000000000000"
    "00000000000000000000000000000000546f6b656e4272696467650100000001"
    "3b26409f8aaded3f5ddca184695aa6a0fa829b0c85caf84856324896d214ca98"
)

CONTRACT_UPGRADE_VAA = bytes.fromhex(
    "01000000010d0273af3c2f55989041b0068a4eaeba8f8825106021996de61439"
    "54c06fc4cfad5c3f1aba6ca951188e962f11251c25ca98628685e2fc2b65ec60"
    "9450cfc4e65112000300c62eb0de7ab3d028920f18e10df7f2a04d00eb88b894"
    "0a27bbce8ce66c67526882c96cc50dd381bdbff30bb65b9347cadff096767290"
    "43af60d652a0b906300004f07b0fe6cab18be7ae827fe11ca8992ff0b5a2a32d"
    "65be958231bf84cf6b14fb5eeb8a51ade1c70aa5b8b8cf83afe3c22d3471481b"
    "da3896ea2a70469f9692b8000574d496729dde6e190959a17945e87cd95e23c1"
    "0047ab2eef5c7d0ec6f91208c7279d8a1b1f4a60069d25932a67d655f2d0b420"
    "59003de75fd3ca7992fdd1b0d4010651f06ab6fdfd42f323840a818b38cfd1c9"
    "9d22366c877903b98df40bdaf2a2042eb8cd0e59c4637e6a80a199b1108cd765"
    "9ba8370f6f9476b479839854d8c1a60007784b37c6103c752cd97a586be8e1ce"
    "ff22a6e488433284ff31cd908b5c7d87e244da7516d07a0fa692684f826e5e6c"
    "8b452004206d6fe5bae46afb1c218cf50d00090b6ccce67ed501cb20fb06de76"
    "b9083f1329ad78d384517a94ab8e9aa601be7a0f00bb603b36504a74ddc36735"
    "9c8ea07f5ccd5022772cc157e00f54156371e4010be1e6b712a2353e4907929c"
    "4057d5babef80dc09febb3dc2934f44048795eef954e99106cb29b1a8d935369"
    "daecbb8bae45192efc3cedbc57315d67ec9ea8000a000ddcc04cd7556a94e8b4"
    "18dc3a8a00efb128d4f76f71431247a92e7a19a833fc02215d1fd69e0e596da5"
    "31ea587ae2ac2f36d20f3b1933060ad6ef3e9d7d8475ba010ec76216494906ae"
    "d8d8310c31a5e4a545ea2af8dbe38eeb74a3d14f0734dd2b1a21b9850ea20e6c"
    "2ca42248788bfb17439d37abda25d705b568b265b113b976c50010c61fe6ebea"
    "61f2cae895c334965070487d39ab6bf04428340af0f7699fddd3c01e0c86daea"
    "9eb449701248a24fa4c0ff75fb600b2c0134bd721791f667116e42001119b79c"
    "aa250e75da1482c7f412687308d13ef700f726b99417bb75ae6dd143fc619f8c"
    "9c29c73f9949affd1629cc286a61917ed7853754a46702920b76cf90eb0012b0"
    "bab5e1a8b321e92f9d3df92430183e4843e57c6f8c15c22d62b2f8e4b8cdc275"
    "9f2854b8d122acdb4b4d8928b87df4199cc683011d2e9b7d41a96d8b480ccc01"
    "0000000039c4ba76000100000000000000000000000000000000000000000000"
    "000000000000000000042564d2efd6084df02000000000000000000000000000"
    "0000000000000000546f6b656e42726964676502000300000000000000000000"
    "00000000000000000000000000000000000000000983"
)


@pytest.fixture
def register_chain_vaa() -> bytes:
    return REGISTER_CHAIN_VAA


@pytest.fixture
def contract_upgrade_vaa() -> bytes:
    return CONTRACT_UPGRADE_VAA


@pytest.fixture(params=["register_chain", "contract_upgrade"])
def governance_vaa(request: pytest.FixtureRequest) -> bytes:
    return {
        "register_chain": REGISTER_CHAIN_VAA,
        "contract_upgrade": CONTRACT_UPGRADE_VAA,
    }[request.param]
